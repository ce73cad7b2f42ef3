# src/matching/basic_matcher.py

"""Primary (product, listing) classification pass."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace

from src.matching.field_rules import (
    FamilyRule,
    ManufacturerRule,
    MatchRule,
    ModelRule,
    SimilarModelRule,
)
from src.matching.title_normalizer import TitleNormalizer
from src.models.listing import Listing, WorkingListing
from src.models.product import Product

logger = logging.getLogger("listing_matcher.matching")


class BasicMatcher:
    """Accept a listing when manufacturer, model and family all agree.

    Listings that name one of the product's similar models are rejected
    even when the product's own model is present too.
    """

    def __init__(self, normalizer: TitleNormalizer | None = None) -> None:
        self.normalizer = normalizer or TitleNormalizer.basic()
        self.rule: MatchRule = (
            ManufacturerRule()
            & ModelRule()
            & FamilyRule()
            & ~SimilarModelRule()
        )

    def accepts(self, product: Product, listing: Listing) -> bool:
        """Return True when *listing* belongs to *product*."""
        return self.rule.evaluate(product, self.normalizer.working(listing))

    def match(
        self,
        products: Sequence[Product],
        listings: Sequence[Listing],
    ) -> tuple[list[Product], int]:
        """Attach every accepted listing to each product.

        Returns new products (catalog order, listings in input order)
        and the total number of (product, listing) matches.
        """
        # Manufacturer equality is required, so only compare within
        # the listing's manufacturer bucket
        buckets: dict[str, list[WorkingListing]] = defaultdict(list)
        for listing in listings:
            buckets[listing.manufacturer.casefold()].append(
                self.normalizer.working(listing)
            )

        matched: list[Product] = []
        total = 0
        for product in products:
            candidates = buckets.get(product.manufacturer.casefold(), [])
            accepted = tuple(
                working.listing
                for working in candidates
                if self.rule.evaluate(product, working)
            )
            if accepted:
                logger.debug(
                    "Basic pass: %d listings for '%s'",
                    len(accepted),
                    product.product_name,
                )
            total += len(accepted)
            matched.append(
                replace(product, listings=product.listings + accepted)
            )

        logger.info(
            "Basic pass matched %d listings across %d products",
            total,
            sum(1 for p in matched if p.listings),
        )
        return matched, total
