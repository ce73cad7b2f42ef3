# tests/test_price_filter.py

"""Tests for PriceNormalizer and PriceOutlierFilter."""

import unittest
from unittest.mock import patch

from src.config.settings import Settings
from src.filters.price_filter import PriceNormalizer, PriceOutlierFilter
from src.models.errors import ConfigurationError, UnknownCurrencyError
from src.models.listing import Listing
from src.models.product import Product


def _listing(price: float, currency: str = "USD", title: str = "") -> Listing:
    """Create a minimal Listing."""
    return Listing(
        title=title or f"item {price}",
        manufacturer="Acme",
        currency=currency,
        price=price,
    )


class TestPriceNormalizer(unittest.TestCase):
    """PriceNormalizer behaviour."""

    def test_base_currency_unchanged(self) -> None:
        self.assertEqual(PriceNormalizer.normalize(_listing(100.0)), 100.0)

    def test_converts_with_multiplier(self) -> None:
        self.assertAlmostEqual(
            PriceNormalizer.normalize(_listing(100.0, "EUR")), 108.0
        )

    def test_currency_code_case_insensitive(self) -> None:
        self.assertAlmostEqual(
            PriceNormalizer.normalize(_listing(100.0, "cad")), 74.0
        )

    def test_unknown_currency_is_configuration_error(self) -> None:
        with self.assertRaises(UnknownCurrencyError) as ctx:
            PriceNormalizer.normalize(_listing(100.0, "JPY"))
        self.assertIsInstance(ctx.exception, ConfigurationError)
        self.assertEqual(ctx.exception.currency, "JPY")
        self.assertIn("JPY", str(ctx.exception))

    def test_check_currencies(self) -> None:
        PriceNormalizer.check_currencies([_listing(1.0), _listing(1.0, "GBP")])
        with self.assertRaises(UnknownCurrencyError):
            PriceNormalizer.check_currencies([_listing(1.0), _listing(1.0, "XXX")])


class TestFilterListings(unittest.TestCase):
    """PriceOutlierFilter.filter_listings behaviour."""

    def test_removes_cheap_accessory(self) -> None:
        listings = [_listing(100.0), _listing(100.0), _listing(100.0), _listing(2.0)]
        kept, removed = PriceOutlierFilter.filter_listings(listings)
        self.assertEqual(removed, 1)
        self.assertEqual([l.price for l in kept], [100.0, 100.0, 100.0])

    def test_keeps_moderate_spread(self) -> None:
        kept, removed = PriceOutlierFilter.filter_listings(
            [_listing(100.0), _listing(30.0)]
        )
        self.assertEqual(removed, 0)
        self.assertEqual(len(kept), 2)

    def test_price_at_threshold_removed(self) -> None:
        """mean([9, 1]) / 5 == 1, and 'at or below' drops it."""
        kept, removed = PriceOutlierFilter.filter_listings(
            [_listing(9.0), _listing(1.0)]
        )
        self.assertEqual(removed, 1)
        self.assertEqual(kept[0].price, 9.0)

    def test_mixed_currencies_normalised(self) -> None:
        listings = [_listing(100.0), _listing(100.0, "CAD"), _listing(10.0)]
        kept, removed = PriceOutlierFilter.filter_listings(listings)
        self.assertEqual(removed, 1)
        self.assertEqual([l.currency for l in kept], ["USD", "CAD"])

    def test_empty_is_noop(self) -> None:
        self.assertEqual(PriceOutlierFilter.filter_listings([]), ((), 0))

    def test_custom_factor(self) -> None:
        _kept, removed = PriceOutlierFilter.filter_listings(
            [_listing(100.0), _listing(30.0)], factor=2.0
        )
        self.assertEqual(removed, 1)

    def test_default_factor_read_at_call_time(self) -> None:
        """A runtime change to OUTLIER_PRICE_FACTOR applies to later calls."""
        listings = [_listing(100.0), _listing(30.0)]
        self.assertEqual(PriceOutlierFilter.filter_listings(listings)[1], 0)

        with patch.object(Settings, "OUTLIER_PRICE_FACTOR", 2.0):
            _kept, removed = PriceOutlierFilter.filter_listings(listings)
            _products, product_removed = PriceOutlierFilter.filter_products(
                [
                    Product(
                        product_name="X",
                        manufacturer="Acme",
                        model="100",
                        listings=tuple(listings),
                    )
                ]
            )
        self.assertEqual(removed, 1)
        self.assertEqual(product_removed, 1)


class TestFilterProducts(unittest.TestCase):
    """PriceOutlierFilter.filter_products behaviour."""

    def test_filters_each_product(self) -> None:
        products = [
            Product(
                product_name="X",
                manufacturer="Acme",
                model="100",
                listings=(_listing(100.0), _listing(100.0), _listing(3.0)),
            ),
            Product(product_name="Y", manufacturer="Acme", model="200"),
        ]
        filtered, removed = PriceOutlierFilter.filter_products(products)

        self.assertEqual(removed, 1)
        self.assertEqual(len(filtered[0].listings), 2)
        self.assertEqual(filtered[1].listings, ())
        self.assertEqual(len(products[0].listings), 3)


if __name__ == "__main__":
    unittest.main()
