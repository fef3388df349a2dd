"""
Exception hierarchy for the rotation pipeline.

Per-instrument errors (PriceFetchError, InsufficientOverlapError) are turned
into skips by the engine. BenchmarkFetchError and NoDataRetrievedError abort
the whole computation.
"""


class RotationError(Exception):
    """Base class for all rotation pipeline errors."""


class PriceFetchError(RotationError):
    def __init__(self, symbol, message):
        self.symbol = symbol
        super().__init__(f"Failed to fetch data for {symbol}: {message}")


class BenchmarkFetchError(RotationError):
    def __init__(self, symbol, cause=None):
        self.symbol = symbol
        self.cause = cause
        super().__init__(f"Could not fetch benchmark data ({symbol}). {cause or ''}".rstrip())


class InsufficientOverlapError(RotationError):
    def __init__(self, symbol, count, required):
        self.symbol = symbol
        self.count = count
        self.required = required
        super().__init__(
            f"Insufficient overlapping data for {symbol}: {count} common timestamps, need {required}"
        )


class NoDataRetrievedError(RotationError):
    def __init__(self, period):
        self.period = period
        label = getattr(period, "value", period)
        super().__init__(f"No sector data could be retrieved for period: {label}.")
