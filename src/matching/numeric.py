# src/matching/numeric.py

"""Numeric token extraction and comparison for listing titles.

Titles for the same product tend to repeat the same numbers (model
numbers, megapixels, zoom factors). Comparison tolerates two kinds of
noise:

- decimal notation: ``"5,5"`` and ``"5.5"`` are the same token;
- rounding of larger numbers: when both integer parts have two or more
  digits, one only needs to be a prefix of the other, so ``"12"``
  agrees with ``"12.1"`` and ``"100"`` with ``"1000"``.
"""

import re
from collections.abc import Iterable

from src.config.settings import Settings

_NUMBER_RE = re.compile(
    rf"\d+(?:[{re.escape(Settings.DECIMAL_SEPARATORS)}]\d+)?"
)
_SEPARATOR_RE = re.compile(rf"[{re.escape(Settings.DECIMAL_SEPARATORS)}]")

# Integer parts at least this long are compared by prefix
_PREFIX_MIN_DIGITS = 2


def extract_numbers(text: str) -> list[str]:
    """Return every numeric token in *text*, in order, duplicates kept."""
    return _NUMBER_RE.findall(text)


def _canonical(token: str) -> str:
    return _SEPARATOR_RE.sub(".", token)


def _integer_part(token: str) -> str:
    return _SEPARATOR_RE.split(token, maxsplit=1)[0]


def tokens_agree(a: str, b: str) -> bool:
    """Return True when two numeric tokens denote the same quantity."""
    int_a, int_b = _integer_part(a), _integer_part(b)
    if len(int_a) >= _PREFIX_MIN_DIGITS and len(int_b) >= _PREFIX_MIN_DIGITS:
        return int_a.startswith(int_b) or int_b.startswith(int_a)
    return _canonical(a) == _canonical(b)


def _covered(tokens: set[str], reference: set[str]) -> bool:
    return all(
        any(tokens_agree(token, ref) for ref in reference)
        for token in tokens
    )


def numbers_match(
    tokens: Iterable[str],
    reference: Iterable[str],
    mutual: bool = False,
) -> bool:
    """Check numeric consistency of *tokens* against *reference*.

    Subset mode: every token must agree with some reference token; the
    reference may hold numbers the tokens lack. Mutual mode additionally
    requires every reference token to agree with some token.
    """
    token_set, reference_set = set(tokens), set(reference)
    if not _covered(token_set, reference_set):
        return False
    if mutual:
        return _covered(reference_set, token_set)
    return True
