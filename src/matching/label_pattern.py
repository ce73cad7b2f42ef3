# src/matching/label_pattern.py

"""Text matchers used to find catalog labels inside listing titles.

Three implementations share the :class:`TextMatcher` interface:

- :class:`ExactMatcher`: whole-string, case-insensitive equality.
- :class:`GapMatcher`: the label's characters in order, with any gap
  between them (plain containment, no boundary check).
- :class:`LabelMatcher`: the label's bare characters with at most one
  non-label character between each pair, isolated by boundaries.

With ``include_dot`` enabled ``"di-git"``, ``"di git"`` and ``"DIGIT."``
all contain the label ``"digit"``, while ``"100"`` is not found inside
``"1000"``.
"""

import re
from abc import ABC, abstractmethod
from functools import lru_cache

from src.config.settings import Settings


def non_label_class(include_dot: bool = True) -> str:
    """Return the regex class matching one non-label character."""
    if include_dot:
        return f"[^{Settings.LABEL_CHARACTERS}]"
    return f"[^{Settings.LABEL_CHARACTERS}.]"


def bare_label(label: str, include_dot: bool = True) -> str:
    """Strip every non-label character from *label* and lowercase it."""
    return re.sub(
        non_label_class(include_dot), "", label.lower(), flags=re.IGNORECASE
    )


class TextMatcher(ABC):
    """Predicate over a piece of free text."""

    @abstractmethod
    def matches(self, text: str) -> bool:
        """Return True when *text* satisfies this matcher."""


class ExactMatcher(TextMatcher):
    """Case-insensitive whole-string equality."""

    def __init__(self, value: str) -> None:
        self.value = value.casefold()

    def matches(self, text: str) -> bool:
        return text.casefold() == self.value

    def __repr__(self) -> str:
        return f"ExactMatcher({self.value!r})"


class GapMatcher(TextMatcher):
    """The label's characters in order, anything allowed in between."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.pattern = re.compile(
            ".*".join(re.escape(c) for c in label.lower()),
            re.IGNORECASE | re.DOTALL,
        )

    def matches(self, text: str) -> bool:
        return bool(self.label) and self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"GapMatcher({self.label!r})"


class LabelMatcher(TextMatcher):
    """Punctuation-tolerant, boundary-aware label search.

    ``trailing_suffix`` allows one extra letter right after the label
    (colour and variant suffixes such as ``"100b"`` for ``"100"``).
    """

    def __init__(
        self,
        label: str,
        include_dot: bool = True,
        trailing_suffix: bool = False,
    ) -> None:
        self.label = label
        self.include_dot = include_dot
        self.trailing_suffix = trailing_suffix
        self.bare = bare_label(label, include_dot)
        self.pattern = self._compile() if self.bare else None

    def _compile(self) -> re.Pattern[str]:
        separator = non_label_class(self.include_dot)
        body = f"{separator}?".join(re.escape(c) for c in self.bare)
        suffix = "[a-z]?" if self.trailing_suffix else ""
        return re.compile(
            f"(?:^|(?<={separator})){body}{suffix}(?={separator}|$)",
            re.IGNORECASE,
        )

    def matches(self, text: str) -> bool:
        if self.pattern is None:
            return False
        return self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return (
            f"LabelMatcher({self.label!r}, include_dot={self.include_dot}, "
            f"trailing_suffix={self.trailing_suffix})"
        )


@lru_cache(maxsize=Settings.MATCHER_CACHE_SIZE)
def label_matcher(
    label: str,
    include_dot: bool = True,
    trailing_suffix: bool = False,
) -> LabelMatcher:
    """Return a cached :class:`LabelMatcher` for *label*."""
    return LabelMatcher(label, include_dot, trailing_suffix)


@lru_cache(maxsize=Settings.MATCHER_CACHE_SIZE)
def gap_matcher(label: str) -> GapMatcher:
    """Return a cached :class:`GapMatcher` for *label*."""
    return GapMatcher(label)
