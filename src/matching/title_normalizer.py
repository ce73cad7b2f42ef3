# src/matching/title_normalizer.py

"""Listing title cleanup before matching."""

import re

from src.config.settings import Settings
from src.models.listing import Listing, WorkingListing


class TitleNormalizer:
    """Cut a title at the first noise marker (bundles, cases, "for ...").

    Everything after the marker usually describes accessories or
    compatible models, which would otherwise produce false matches.
    """

    def __init__(self, noise_pattern: str) -> None:
        self.noise_re = re.compile(noise_pattern, re.IGNORECASE)

    @classmethod
    def basic(cls) -> "TitleNormalizer":
        """Normalizer for the primary matching pass."""
        return cls(Settings.BASIC_NOISE_PATTERN)

    @classmethod
    def secondary(cls) -> "TitleNormalizer":
        """Normalizer for numeric fingerprinting and lenient matching."""
        return cls(Settings.SECONDARY_NOISE_PATTERN)

    def normalize(self, title: str) -> str:
        match = self.noise_re.search(title)
        if match is None:
            return title.strip()
        return title[: match.start()].strip()

    def working(self, listing: Listing) -> WorkingListing:
        """Pair *listing* with its normalized title."""
        return WorkingListing(listing=listing, title=self.normalize(listing.title))
