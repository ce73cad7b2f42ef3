# src/matching/field_rules.py

"""Composable (product, listing) acceptance rules.

Every rule is a pure predicate over a :class:`Product` and a
:class:`WorkingListing`. Rules combine with ``&``, ``|`` and ``~``::

    rule = ManufacturerRule() & ModelRule() & FamilyRule() & ~SimilarModelRule()
"""

from abc import ABC, abstractmethod

from src.matching.label_pattern import ExactMatcher, label_matcher
from src.matching.numeric import extract_numbers, numbers_match
from src.models.listing import WorkingListing
from src.models.product import Product


class MatchRule(ABC):
    """A single acceptance test for a (product, listing) pair."""

    @abstractmethod
    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        """Return True when *listing* passes this test for *product*."""

    def __and__(self, other: "MatchRule") -> "AllOf":
        return AllOf(self, other)

    def __or__(self, other: "MatchRule") -> "AnyOf":
        return AnyOf(self, other)

    def __invert__(self) -> "Not":
        return Not(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ── Combinators ──────────────────────────────────────────


class AllOf(MatchRule):
    """Conjunction, evaluated left to right with short-circuit."""

    def __init__(self, *rules: MatchRule) -> None:
        flat: list[MatchRule] = []
        for rule in rules:
            if isinstance(rule, AllOf):
                flat.extend(rule.rules)
            else:
                flat.append(rule)
        self.rules = tuple(flat)

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return all(rule.evaluate(product, listing) for rule in self.rules)

    def __repr__(self) -> str:
        return " & ".join(repr(rule) for rule in self.rules)


class AnyOf(MatchRule):
    """Disjunction, evaluated left to right with short-circuit."""

    def __init__(self, *rules: MatchRule) -> None:
        self.rules = rules

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return any(rule.evaluate(product, listing) for rule in self.rules)

    def __repr__(self) -> str:
        return "(" + " | ".join(repr(rule) for rule in self.rules) + ")"


class Not(MatchRule):
    """Negation of another rule."""

    def __init__(self, rule: MatchRule) -> None:
        self.rule = rule

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return not self.rule.evaluate(product, listing)

    def __repr__(self) -> str:
        return f"~{self.rule!r}"


# ── Field tests ──────────────────────────────────────────


class ManufacturerRule(MatchRule):
    """Listing manufacturer equals the product's, ignoring case only."""

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return ExactMatcher(product.manufacturer).matches(listing.manufacturer)


class ModelRule(MatchRule):
    """Listing title contains the product model as a label."""

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return label_matcher(product.model).matches(listing.title)


class LenientModelRule(MatchRule):
    """Like :class:`ModelRule`, but one trailing letter may follow the model."""

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return label_matcher(
            product.model, trailing_suffix=True
        ).matches(listing.title)


class FamilyRule(MatchRule):
    """Listing title contains the family; passes when there is none."""

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        if not product.family:
            return True
        return label_matcher(product.family).matches(listing.title)


class SimilarModelRule(MatchRule):
    """Listing title names one of the product's ambiguous neighbours.

    Used negated: a listing for ``"A100"`` must not count for ``"A1"``.
    """

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return any(
            label_matcher(model).matches(listing.title)
            for model in sorted(product.similar_models)
        )


class NumericFingerprintRule(MatchRule):
    """Every number in the title is covered by an established fingerprint."""

    def __init__(self, fingerprint: frozenset[str]) -> None:
        self.fingerprint = fingerprint

    def evaluate(self, product: Product, listing: WorkingListing) -> bool:
        return numbers_match(extract_numbers(listing.title), self.fingerprint)

    def __repr__(self) -> str:
        return f"NumericFingerprintRule({sorted(self.fingerprint)!r})"
