# src/models/errors.py

"""Exceptions raised by the matching engine and its loaders."""


class MatchingError(Exception):
    """Base class for all listing_matcher errors."""


class InvalidRecordError(MatchingError, ValueError):
    """A catalog or listing record violates the input contract.

    Raised on the first offending record; the engine never skips rows.
    """

    def __init__(
        self,
        field: str,
        reason: str,
        kind: str = "record",
        index: int | None = None,
    ) -> None:
        self.field = field
        self.reason = reason
        self.kind = kind
        self.index = index
        where = f"{kind} #{index}" if index is not None else kind
        super().__init__(
            f"invalid record ({where}): field '{field}' {reason}"
        )


class ConfigurationError(MatchingError):
    """The engine's static configuration cannot handle the input."""


class UnknownCurrencyError(ConfigurationError, KeyError):
    """A listing uses a currency missing from the multiplier table."""

    def __init__(self, currency: str) -> None:
        self.currency = currency
        super().__init__(
            f"no conversion multiplier configured for currency '{currency}'"
        )

    def __str__(self) -> str:
        return str(self.args[0])
