# src/models/result.py

"""Externally visible reconciliation result."""

from dataclasses import dataclass
from typing import Any

from src.models.listing import Listing
from src.models.product import Product


@dataclass(frozen=True)
class Result:
    """A product name and the listings attributed to it."""

    product_name: str
    listings: tuple[Listing, ...] = ()

    @classmethod
    def from_product(cls, product: Product) -> "Result":
        return cls(
            product_name=product.product_name,
            listings=product.listings,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to ``{product_name, listings}`` with original records."""
        return {
            "product_name": self.product_name,
            "listings": [listing.to_dict() for listing in self.listings],
        }
