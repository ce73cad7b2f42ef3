# src/matching/secondary_matcher.py

"""Relaxed second pass recovering listings the basic pass missed.

A product that already has a consistent set of matches gets a numeric
fingerprint: the numbers in its first listing title, provided every
other matched title carries the same numbers. Unmatched listings from
the same manufacturer that mention the model (optionally with a
one-letter variant suffix) and whose numbers are all part of that
fingerprint are then accepted as well.
"""

import logging
from collections.abc import Collection, Sequence
from dataclasses import replace

from src.config.settings import Settings
from src.matching.field_rules import (
    LenientModelRule,
    ManufacturerRule,
    MatchRule,
    NumericFingerprintRule,
    SimilarModelRule,
)
from src.matching.numeric import extract_numbers, numbers_match
from src.matching.title_normalizer import TitleNormalizer
from src.models.listing import Listing
from src.models.product import Product

logger = logging.getLogger("listing_matcher.matching")


class LenientSecondaryMatcher:
    """Numeric-fingerprint based recovery pass."""

    def __init__(
        self,
        normalizer: TitleNormalizer | None = None,
        min_listings: int | None = None,
        min_model_length: int | None = None,
        min_fingerprint_numbers: int | None = None,
    ) -> None:
        self.normalizer = normalizer or TitleNormalizer.secondary()
        self.min_listings = (
            Settings.SECONDARY_MIN_LISTINGS if min_listings is None else min_listings
        )
        self.min_model_length = (
            Settings.SECONDARY_MIN_MODEL_LENGTH
            if min_model_length is None
            else min_model_length
        )
        self.min_fingerprint_numbers = (
            Settings.FINGERPRINT_MIN_NUMBERS
            if min_fingerprint_numbers is None
            else min_fingerprint_numbers
        )

    def fingerprint(self, product: Product) -> frozenset[str] | None:
        """Return the product's numeric fingerprint, or None if unreliable."""
        if len(product.listings) < self.min_listings:
            return None
        if len(product.model) < self.min_model_length:
            return None

        token_sets = [
            extract_numbers(self.normalizer.normalize(listing.title))
            for listing in product.listings
        ]
        first, others = token_sets[0], token_sets[1:]
        if len(set(first)) < self.min_fingerprint_numbers:
            return None

        for tokens in others:
            if not numbers_match(tokens, first, mutual=True):
                logger.debug(
                    "No fingerprint for '%s': %s disagrees with %s",
                    product.product_name,
                    tokens,
                    first,
                )
                return None
        return frozenset(first)

    def rule_for(self, fingerprint: frozenset[str]) -> MatchRule:
        """Build the acceptance rule for one fingerprinted product."""
        return (
            ManufacturerRule()
            & LenientModelRule()
            & ~SimilarModelRule()
            & NumericFingerprintRule(fingerprint)
        )

    def match(
        self,
        products: Sequence[Product],
        listings: Sequence[Listing],
        already_matched: Collection[Listing] = (),
    ) -> tuple[list[Product], int]:
        """Append recovered listings to each fingerprinted product.

        *already_matched* holds the listings the basic pass accepted for
        any product; those are never offered to this pass.

        Returns new products and the number of listings recovered.
        """
        excluded = set(already_matched)
        candidates = [
            self.normalizer.working(listing)
            for listing in listings
            if listing not in excluded
        ]

        updated: list[Product] = []
        recovered = 0
        for product in products:
            fingerprint = self.fingerprint(product)
            if fingerprint is None:
                updated.append(product)
                continue

            rule = self.rule_for(fingerprint)
            accepted = tuple(
                working.listing
                for working in candidates
                if rule.evaluate(product, working)
            )
            if accepted:
                logger.debug(
                    "Secondary pass: %d extra listings for '%s' "
                    "(fingerprint %s)",
                    len(accepted),
                    product.product_name,
                    sorted(fingerprint),
                )
            recovered += len(accepted)
            updated.append(
                replace(product, listings=product.listings + accepted)
            )

        logger.info("Secondary pass recovered %d listings", recovered)
        return updated, recovered
