# src/filters/record_validator.py

"""Record validation: turn raw mappings into catalog and listing models."""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from src.models.errors import InvalidRecordError
from src.models.listing import Listing
from src.models.product import Product

logger = logging.getLogger("listing_matcher.filters")


def _require_text(
    record: Mapping[str, Any], field: str, kind: str, index: int
) -> str:
    value = record.get(field)
    if value is None:
        raise InvalidRecordError(field, "is missing", kind, index)
    if not isinstance(value, str):
        raise InvalidRecordError(
            field, f"must be a string, got {type(value).__name__}", kind, index
        )
    if not value.strip():
        raise InvalidRecordError(field, "is blank", kind, index)
    return value


def _parse_price(record: Mapping[str, Any], index: int) -> float:
    value = record.get("price")
    if value is None:
        raise InvalidRecordError("price", "is missing", "listing", index)
    if isinstance(value, bool):
        raise InvalidRecordError("price", "is not a number", "listing", index)
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise InvalidRecordError(
            "price", f"is not a number: {value!r}", "listing", index
        ) from None
    if not math.isfinite(price):
        raise InvalidRecordError(
            "price", f"is not a finite number: {value!r}", "listing", index
        )
    return price


class RecordValidator:
    """Validate input records and fail fast on the first bad one."""

    @staticmethod
    def product_from_record(record: Mapping[str, Any], index: int = 0) -> Product:
        family = record.get("family")
        if family is not None and not isinstance(family, str):
            raise InvalidRecordError(
                "family",
                f"must be a string, got {type(family).__name__}",
                "product",
                index,
            )
        return Product(
            product_name=_require_text(record, "product_name", "product", index),
            manufacturer=_require_text(record, "manufacturer", "product", index),
            model=_require_text(record, "model", "product", index),
            family=family or None,
        )

    @staticmethod
    def listing_from_record(record: Mapping[str, Any], index: int = 0) -> Listing:
        return Listing(
            title=_require_text(record, "title", "listing", index),
            manufacturer=_require_text(record, "manufacturer", "listing", index),
            currency=_require_text(record, "currency", "listing", index),
            price=_parse_price(record, index),
            raw=dict(record),
        )

    @staticmethod
    def validate_products(
        records: Iterable[Mapping[str, Any]],
    ) -> list[Product]:
        """Build catalog products; ``product_name`` must be unique."""
        products: list[Product] = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            product = RecordValidator.product_from_record(record, index)
            if product.product_name in seen:
                raise InvalidRecordError(
                    "product_name",
                    f"duplicates '{product.product_name}'",
                    "product",
                    index,
                )
            seen.add(product.product_name)
            products.append(product)

        logger.info("Validated %d catalog products", len(products))
        return products

    @staticmethod
    def validate_listings(
        records: Iterable[Mapping[str, Any]],
    ) -> list[Listing]:
        """Build listings, keeping each original record for output."""
        listings = [
            RecordValidator.listing_from_record(record, index)
            for index, record in enumerate(records)
        ]
        logger.info("Validated %d listings", len(listings))
        return listings
