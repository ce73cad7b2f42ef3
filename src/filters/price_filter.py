# src/filters/price_filter.py

"""Price normalisation and low-price outlier removal."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from src.config.settings import Settings
from src.models.errors import UnknownCurrencyError
from src.models.listing import Listing
from src.models.product import Product

logger = logging.getLogger("listing_matcher.filters")


class PriceNormalizer:
    """Convert listing prices to the reference currency."""

    @staticmethod
    def multiplier(currency: str) -> float:
        try:
            return Settings.CURRENCY_MULTIPLIERS[currency.upper()]
        except KeyError:
            raise UnknownCurrencyError(currency) from None

    @staticmethod
    def normalize(listing: Listing) -> float:
        """Return the listing price in the reference currency."""
        return listing.price * PriceNormalizer.multiplier(listing.currency)

    @staticmethod
    def check_currencies(listings: Iterable[Listing]) -> None:
        """Raise :class:`UnknownCurrencyError` for the first unknown currency."""
        for currency in sorted({listing.currency for listing in listings}):
            PriceNormalizer.multiplier(currency)


class PriceOutlierFilter:
    """Drop listings priced far below the rest of a product's matches.

    Such listings are almost always accessories (batteries, cases,
    lens caps) sold under a title naming the product.
    """

    @staticmethod
    def filter_listings(
        listings: Sequence[Listing],
        factor: float | None = None,
    ) -> tuple[tuple[Listing, ...], int]:
        """Remove listings at or below ``mean / factor``.

        Returns the kept listings and the count removed. An empty input
        is returned unchanged.
        """
        if factor is None:
            factor = Settings.OUTLIER_PRICE_FACTOR
        if not listings:
            return tuple(listings), 0

        prices = [PriceNormalizer.normalize(listing) for listing in listings]
        threshold = sum(prices) / len(prices) / factor

        kept = tuple(
            listing
            for listing, price in zip(listings, prices)
            if price > threshold
        )
        return kept, len(listings) - len(kept)

    @staticmethod
    def filter_products(
        products: Sequence[Product],
        factor: float | None = None,
    ) -> tuple[list[Product], int]:
        """Apply :meth:`filter_listings` to every product.

        Returns new products and the total number of listings removed.
        """
        filtered: list[Product] = []
        removed = 0
        for product in products:
            kept, dropped = PriceOutlierFilter.filter_listings(
                product.listings, factor
            )
            if dropped:
                logger.debug(
                    "Dropped %d low-price outliers from '%s'",
                    dropped,
                    product.product_name,
                )
                removed += dropped
                product = replace(product, listings=kept)
            filtered.append(product)

        if removed:
            logger.info(
                "Outlier filter removed %d low-priced listings",
                removed,
            )
        return filtered, removed
