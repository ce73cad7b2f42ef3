# src/models/listing.py

"""Marketplace listing models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Listing:
    """A single marketplace listing, as loaded from the source stream."""

    title: str
    manufacturer: str
    currency: str
    price: float
    raw: Mapping[str, Any] = field(
        default_factory=dict, compare=False, repr=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Return the original record, or the parsed fields if none."""
        if self.raw:
            return dict(self.raw)
        return {
            "title": self.title,
            "manufacturer": self.manufacturer,
            "currency": self.currency,
            "price": self.price,
        }


@dataclass(frozen=True)
class WorkingListing:
    """A listing paired with its noise-stripped title, used while matching."""

    listing: Listing
    title: str

    @property
    def manufacturer(self) -> str:
        return self.listing.manufacturer
