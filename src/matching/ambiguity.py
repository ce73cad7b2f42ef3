# src/matching/ambiguity.py

"""Detection of catalog models that hide inside other models."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from src.matching.label_pattern import gap_matcher
from src.models.product import Product

logger = logging.getLogger("listing_matcher.matching")


class AmbiguityResolver:
    """Find, for each product, the other models its own model would match."""

    @staticmethod
    def find_similar_models(
        product: Product,
        catalog: Sequence[Product],
    ) -> frozenset[str]:
        """Return the other catalog models containing *product*'s model.

        ``"A100"`` is similar to ``"A1"`` because ``a.*1`` matches it,
        so a listing titled "A100" is later kept away from "A1".
        """
        own = product.model.casefold()
        matcher = gap_matcher(product.model)
        return frozenset(
            other.model
            for other in catalog
            if other.model.casefold() != own and matcher.matches(other.model)
        )

    @staticmethod
    def resolve(catalog: Sequence[Product]) -> list[Product]:
        """Return new products carrying their ``similar_models``."""
        resolved: list[Product] = []
        ambiguous = 0
        for product in catalog:
            similar = AmbiguityResolver.find_similar_models(product, catalog)
            if similar:
                ambiguous += 1
                logger.debug(
                    "Model '%s' (%s) is ambiguous with: %s",
                    product.model,
                    product.product_name,
                    ", ".join(sorted(similar)),
                )
            resolved.append(replace(product, similar_models=similar))

        logger.info(
            "Ambiguity resolution flagged %d of %d products",
            ambiguous,
            len(catalog),
        )
        return resolved
