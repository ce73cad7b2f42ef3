# src/config/settings.py

"""Central configuration for the listing_matcher engine."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the listing_matcher engine."""

    # --- Labels ---
    LABEL_CHARACTERS: str = "a-z0-9"    # Regex class body, matched case-insensitively
    DECIMAL_SEPARATORS: str = ".,"      # Accepted inside numeric tokens
    MATCHER_CACHE_SIZE: int = 50000     # Compiled label matchers kept per builder

    # --- Title noise (truncate at first match) ---
    BASIC_NOISE_PATTERN: str = (
        r"(?:\bw/|\s\+|\b(?:with|for|plus|incl|inkl|including|bundle|kit"
        r"|avec|pour|mit|f[üu]r|case|bag|housse|[ée]tui|sacoche|tasche)\b)"
    )
    SECONDARY_NOISE_PATTERN: str = (
        r"(?:\bw/|\s\+|\b(?:with|plus|incl|inkl|including|bundle"
        r"|avec|mit)\b)"
    )

    # --- Prices ---
    CURRENCY_MULTIPLIERS: dict[str, float] = {
        "USD": 1.0,
        "CAD": 0.74,
        "EUR": 1.08,
        "GBP": 1.27,
    }
    OUTLIER_PRICE_FACTOR: float = float(
        os.getenv("OUTLIER_PRICE_FACTOR", "5")
    )

    # --- Secondary pass ---
    SECONDARY_MIN_LISTINGS: int = int(
        os.getenv("SECONDARY_MIN_LISTINGS", "3")
    )
    SECONDARY_MIN_MODEL_LENGTH: int = 3
    FINGERPRINT_MIN_NUMBERS: int = 2

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"

    PRODUCTS_FILE: str = "products.txt"
    LISTINGS_FILE: str = "listings.txt"
    RESULTS_FILE: str = "results.txt"
