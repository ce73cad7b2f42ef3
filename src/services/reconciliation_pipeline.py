# src/services/reconciliation_pipeline.py

"""Orchestrates one reconciliation run of a catalog against listings."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.filters.price_filter import PriceNormalizer, PriceOutlierFilter
from src.filters.record_validator import RecordValidator
from src.matching.ambiguity import AmbiguityResolver
from src.matching.basic_matcher import BasicMatcher
from src.matching.secondary_matcher import LenientSecondaryMatcher
from src.models.listing import Listing
from src.models.product import Product
from src.models.result import Result

logger = logging.getLogger("listing_matcher.pipeline")


class PipelineStage(Enum):
    """Stages of a run, in the order they are reached."""

    LOADED = "loaded"
    AMBIGUITY_RESOLVED = "ambiguity_resolved"
    BASIC_MATCHED = "basic_matched"
    OUTLIER_FILTERED = "outlier_filtered"
    SECONDARY_MATCHED = "secondary_matched"
    PROJECTED = "projected"
    DONE = "done"


@dataclass
class ReconciliationResult:
    """Container for a completed reconciliation run."""

    results: list[Result] = field(
        default_factory=lambda: list[Result]()
    )
    product_count: int = 0
    listing_count: int = 0
    ambiguous_count: int = 0
    basic_match_count: int = 0
    outlier_count: int = 0
    secondary_match_count: int = 0
    stages: list[PipelineStage] = field(
        default_factory=lambda: list[PipelineStage]()
    )

    @property
    def matched_listing_count(self) -> int:
        """Listings attributed to at least one product.

        Counted per input record, so two records with equal fields are
        counted twice.
        """
        return len({
            id(listing)
            for result in self.results
            for listing in result.listings
        })

    @property
    def stage(self) -> PipelineStage | None:
        return self.stages[-1] if self.stages else None


class ReconciliationPipeline:
    """Single linear pass: resolve, match, filter, recover, project."""

    def __init__(
        self,
        basic_matcher: BasicMatcher | None = None,
        secondary_matcher: LenientSecondaryMatcher | None = None,
    ) -> None:
        self.basic_matcher = basic_matcher or BasicMatcher()
        self.secondary_matcher = secondary_matcher or LenientSecondaryMatcher()

    @staticmethod
    def _advance(result: ReconciliationResult, stage: PipelineStage) -> None:
        result.stages.append(stage)
        logger.debug("Pipeline reached stage %s", stage.value)

    def run(
        self,
        product_records: Iterable[Mapping[str, Any]],
        listing_records: Iterable[Mapping[str, Any]],
    ) -> ReconciliationResult:
        """Validate raw records, then reconcile them.

        Raises:
            InvalidRecordError: a record is malformed.
            UnknownCurrencyError: a listing currency has no multiplier.
        """
        products = RecordValidator.validate_products(product_records)
        listings = RecordValidator.validate_listings(listing_records)
        return self.run_models(products, listings)

    def run_models(
        self,
        products: list[Product],
        listings: list[Listing],
    ) -> ReconciliationResult:
        """Reconcile already validated products and listings."""
        PriceNormalizer.check_currencies(listings)

        result = ReconciliationResult(
            product_count=len(products),
            listing_count=len(listings),
        )
        self._advance(result, PipelineStage.LOADED)
        logger.info(
            "Reconciling %d products against %d listings",
            len(products),
            len(listings),
        )

        current = AmbiguityResolver.resolve(products)
        result.ambiguous_count = sum(1 for p in current if p.similar_models)
        self._advance(result, PipelineStage.AMBIGUITY_RESOLVED)

        current, result.basic_match_count = self.basic_matcher.match(
            current, listings
        )
        basic_matched = {
            listing for product in current for listing in product.listings
        }
        self._advance(result, PipelineStage.BASIC_MATCHED)

        current, result.outlier_count = PriceOutlierFilter.filter_products(
            current
        )
        self._advance(result, PipelineStage.OUTLIER_FILTERED)

        current, result.secondary_match_count = self.secondary_matcher.match(
            current, listings, basic_matched
        )
        self._advance(result, PipelineStage.SECONDARY_MATCHED)

        result.results = [Result.from_product(p) for p in current]
        self._advance(result, PipelineStage.PROJECTED)

        logger.info(
            "Reconciliation done: %d basic, %d outliers removed, "
            "%d recovered, %d distinct listings matched",
            result.basic_match_count,
            result.outlier_count,
            result.secondary_match_count,
            result.matched_listing_count,
        )
        self._advance(result, PipelineStage.DONE)
        return result


def reconcile(
    product_records: Iterable[Mapping[str, Any]],
    listing_records: Iterable[Mapping[str, Any]],
) -> list[Result]:
    """Run the default pipeline and return the per-product results."""
    return ReconciliationPipeline().run(product_records, listing_records).results
