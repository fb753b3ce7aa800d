"""
Market data client errors

Transport failures are not wrapped here: whatever the HTTP transport raises
(ccxt errors for the default transport) reaches the caller unmodified.
"""


class MarketDataError(Exception):
    """Base class for errors raised by the market data client itself"""


class InvalidGranularityError(MarketDataError, ValueError):
    """Granularity is not one of the exchange's accepted bucket sizes"""

    def __init__(self, granularity):
        self.granularity = granularity
        super().__init__(
            f"Unsupported granularity: {granularity!r}. "
            f"Supported: 60, 300, 900, 3600, 21600, 86400 seconds"
        )
