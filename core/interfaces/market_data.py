"""
Abstract base class for exchange product (market data) REST APIs

Read-only public endpoints: products, candles, order book, trades, stats, ticker
"""

from abc import ABC, abstractmethod

from core.models.market_data import (
    Candle,
    CandlesRequest,
    OrderBook,
    OrderBookLevel,
    Product,
    ProductStats,
    ProductTicker,
    Trade,
)


class BaseProductAPI(ABC):
    """
    Abstract base class for product market data clients

    Implementations:
    - CoinbaseProductAPI (providers/coinbase/rest_api.py)

    Example:
        >>> from factory.client_factory import create_product_api
        >>>
        >>> async with create_product_api() as api:
        ...     candles = await api.get_candles(
        ...         "BTC-USD",
        ...         start="2020-03-09T00:00:00.000Z",
        ...         end="2020-03-15T23:59:59.999Z",
        ...         granularity=3600,
        ...     )
    """

    def __init__(self, exchange_name: str):
        self.exchange_name = exchange_name

    @abstractmethod
    async def get_candles(
        self, product_id: str, params: CandlesRequest | None = None, **kwargs
    ) -> list[Candle]:
        """
        Get historic rates for a product, ascending by time

        Ranges exceeding the exchange's per-request candle limit are split
        into sequential requests and merged.
        """

    @abstractmethod
    async def get_products(self) -> list[Product]:
        """Get the list of available currency pairs"""

    @abstractmethod
    async def get_trades(self, product_id: str) -> list[Trade]:
        """Get latest trades for a product"""

    @abstractmethod
    async def get_product_order_book(
        self, product_id: str, level: OrderBookLevel = OrderBookLevel.ONLY_BEST_BID_AND_ASK
    ) -> OrderBook:
        """Get the order book at the requested level of detail"""

    @abstractmethod
    async def get_product_stats(self, product_id: str) -> ProductStats:
        """Get latest 24 hours of movement data for a product"""

    @abstractmethod
    async def get_product_ticker(self, product_id: str) -> ProductTicker:
        """Get snapshot information about the last trade, best bid/ask and 24h volume"""

    @abstractmethod
    async def close(self) -> None:
        """Close the underlying transport"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
