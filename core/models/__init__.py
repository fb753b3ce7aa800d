"""Models module - Pydantic data models"""

from .market_data import (
    AggregatedOrder,
    Candle,
    CandleGranularity,
    CandlesRequest,
    NonAggregatedOrder,
    OrderBook,
    OrderBookLevel,
    OrderBookLevel1,
    OrderBookLevel2,
    OrderBookLevel3,
    Product,
    ProductStats,
    ProductTicker,
    Trade,
)

__all__ = [
    "Product",
    "ProductTicker",
    "ProductStats",
    "Trade",
    "Candle",
    "CandleGranularity",
    "CandlesRequest",
    "OrderBook",
    "OrderBookLevel",
    "OrderBookLevel1",
    "OrderBookLevel2",
    "OrderBookLevel3",
    "AggregatedOrder",
    "NonAggregatedOrder",
]
