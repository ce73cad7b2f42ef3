# tests/test_field_rules.py

"""Tests for the composable field rules."""

import unittest

from src.matching.field_rules import (
    AllOf,
    AnyOf,
    FamilyRule,
    LenientModelRule,
    ManufacturerRule,
    ModelRule,
    Not,
    NumericFingerprintRule,
    SimilarModelRule,
)
from src.models.listing import Listing, WorkingListing
from src.models.product import Product


def _product(
    model: str = "S4000",
    manufacturer: str = "Nikon",
    family: str | None = None,
    similar_models: frozenset[str] = frozenset(),
) -> Product:
    """Create a minimal Product."""
    return Product(
        product_name=f"{manufacturer}_{model}",
        manufacturer=manufacturer,
        model=model,
        family=family,
        similar_models=similar_models,
    )


def _working(title: str, manufacturer: str = "Nikon") -> WorkingListing:
    """Create a WorkingListing whose title is already normalized."""
    listing = Listing(
        title=title, manufacturer=manufacturer, currency="USD", price=100.0
    )
    return WorkingListing(listing=listing, title=title)


class TestManufacturerRule(unittest.TestCase):
    """ManufacturerRule behaviour."""

    def test_case_insensitive(self) -> None:
        self.assertTrue(
            ManufacturerRule().evaluate(_product(), _working("x", "NIKON"))
        )

    def test_exact(self) -> None:
        self.assertFalse(
            ManufacturerRule().evaluate(_product(), _working("x", "Nikon Inc"))
        )


class TestModelRules(unittest.TestCase):
    """ModelRule and LenientModelRule."""

    def test_model_present(self) -> None:
        self.assertTrue(
            ModelRule().evaluate(_product(), _working("Nikon Coolpix S4000"))
        )

    def test_model_with_suffix_needs_lenient_rule(self) -> None:
        listing = _working("Nikon Coolpix S4000b 12MP")
        self.assertFalse(ModelRule().evaluate(_product(), listing))
        self.assertTrue(LenientModelRule().evaluate(_product(), listing))

    def test_lenient_rule_keeps_boundaries(self) -> None:
        self.assertFalse(
            LenientModelRule().evaluate(_product(), _working("S40000"))
        )


class TestFamilyRule(unittest.TestCase):
    """FamilyRule behaviour."""

    def test_no_family_passes(self) -> None:
        self.assertTrue(FamilyRule().evaluate(_product(), _working("anything")))

    def test_empty_family_passes(self) -> None:
        self.assertTrue(
            FamilyRule().evaluate(_product(family=""), _working("anything"))
        )

    def test_family_required_when_set(self) -> None:
        product = _product(family="Coolpix")
        self.assertTrue(
            FamilyRule().evaluate(product, _working("Nikon Cool-pix S4000"))
        )
        self.assertFalse(FamilyRule().evaluate(product, _working("Nikon S4000")))


class TestSimilarModelRule(unittest.TestCase):
    """SimilarModelRule behaviour."""

    def test_flags_similar_model(self) -> None:
        product = _product(model="A1", similar_models=frozenset({"A100"}))
        self.assertTrue(
            SimilarModelRule().evaluate(product, _working("Acme A100 camera"))
        )

    def test_own_model_not_flagged(self) -> None:
        product = _product(model="A1", similar_models=frozenset({"A100"}))
        self.assertFalse(
            SimilarModelRule().evaluate(product, _working("Acme A1 camera"))
        )


class TestNumericFingerprintRule(unittest.TestCase):
    """NumericFingerprintRule behaviour."""

    def test_numbers_covered(self) -> None:
        rule = NumericFingerprintRule(frozenset({"1300", "12.1", "4"}))
        self.assertTrue(rule.evaluate(_product(), _working("SD1300 12.1MP")))

    def test_unknown_number_rejected(self) -> None:
        rule = NumericFingerprintRule(frozenset({"1300", "12.1", "4"}))
        self.assertFalse(rule.evaluate(_product(), _working("SD1300 14MP")))


class TestCombinators(unittest.TestCase):
    """&, | and ~ composition."""

    def test_and_flattens(self) -> None:
        rule = ManufacturerRule() & ModelRule() & FamilyRule()
        self.assertIsInstance(rule, AllOf)
        self.assertEqual(len(rule.rules), 3)

    def test_and_requires_all(self) -> None:
        rule = ManufacturerRule() & ModelRule()
        self.assertTrue(rule.evaluate(_product(), _working("Nikon S4000")))
        self.assertFalse(
            rule.evaluate(_product(), _working("Nikon S4000", "Canon"))
        )

    def test_or_requires_any(self) -> None:
        rule = ModelRule() | FamilyRule()
        self.assertIsInstance(rule, AnyOf)
        self.assertTrue(rule.evaluate(_product(), _working("no model here")))

    def test_invert(self) -> None:
        rule = ~ModelRule()
        self.assertIsInstance(rule, Not)
        self.assertFalse(rule.evaluate(_product(), _working("Nikon S4000")))

    def test_rules_do_not_mutate_inputs(self) -> None:
        product = _product(family="Coolpix")
        listing = _working("Nikon Coolpix S4000")
        rule = ManufacturerRule() & ModelRule() & FamilyRule()
        rule.evaluate(product, listing)
        self.assertEqual(product, _product(family="Coolpix"))
        self.assertEqual(listing, _working("Nikon Coolpix S4000"))


if __name__ == "__main__":
    unittest.main()
