# src/models/product.py

"""Catalog product model for inter-stage data flow."""

from dataclasses import dataclass

from src.models.listing import Listing


@dataclass(frozen=True)
class Product:
    """A canonical catalog entry.

    ``similar_models`` and ``listings`` start empty and are filled in by
    the reconciliation pipeline, which derives new instances with
    :func:`dataclasses.replace` rather than mutating this one.
    """

    product_name: str
    manufacturer: str
    model: str
    family: str | None = None
    similar_models: frozenset[str] = frozenset()
    listings: tuple[Listing, ...] = ()
