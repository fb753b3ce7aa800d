"""
Market data models

Pydantic models for Coinbase Exchange public product data:
- Product / ProductTicker / ProductStats: product metadata and snapshots
- Trade: Individual trade execution
- Candle: OHLCV candlestick (normalized from the positional wire format)
- OrderBookLevel1/2/3: Order book snapshots, shape selected by request level
"""

from datetime import datetime
from decimal import Decimal
from enum import IntEnum
from typing import Annotated, Any, Literal, NamedTuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class CandleGranularity(IntEnum):
    """Accepted granularity in seconds to group historic rates"""

    ONE_MINUTE = 60
    FIVE_MINUTES = 300
    FIFTEEN_MINUTES = 900
    ONE_HOUR = 3600
    SIX_HOURS = 21600
    ONE_DAY = 86400


class OrderBookLevel(IntEnum):
    """
    Order book detail requested from the exchange

    The book payload carries no tag describing its own shape, so this
    request value is the only thing that determines how it is decoded.
    """

    ONLY_BEST_BID_AND_ASK = 1
    TOP_50_BIDS_AND_ASKS = 2
    FULL_ORDER_BOOK = 3


class Product(BaseModel):
    """Currency pair available for trading"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Product ID (BTC-USD, ETH-EUR)")
    base_currency: str
    quote_currency: str
    base_increment: str | None = None
    quote_increment: str | None = Field(
        default=None, description="Order price must be a multiple of this increment"
    )
    base_max_size: str | None = Field(default=None, description="Maximum order size")
    base_min_size: str | None = Field(default=None, description="Minimum order size")
    min_market_funds: str | None = None
    max_market_funds: str | None = None
    display_name: str | None = None
    status: str | None = None
    status_message: str | None = None
    cancel_only: bool = False
    limit_only: bool = False
    post_only: bool = False
    margin_enabled: bool = False


class ProductTicker(BaseModel):
    """Snapshot of the last trade (tick), best bid/ask and 24h volume"""

    model_config = ConfigDict(extra="ignore")

    trade_id: int
    price: Decimal
    size: Decimal
    bid: Decimal
    ask: Decimal
    volume: Decimal
    time: datetime


class ProductStats(BaseModel):
    """24 hour movement data for a product"""

    model_config = ConfigDict(extra="ignore")

    open: Decimal
    high: Decimal
    low: Decimal
    last: Decimal
    volume: Decimal
    volume_30day: Decimal | None = None


class Trade(BaseModel):
    """
    Public trade execution

    `side` is the maker order side as reported by the exchange.
    """

    model_config = ConfigDict(extra="ignore")

    time: datetime = Field(description="Trade timestamp (UTC)")
    trade_id: int = Field(description="Exchange-specific trade ID")
    price: Decimal = Field(description="Trade price")
    size: Decimal = Field(description="Trade quantity")
    side: Literal["buy", "sell"] = Field(description="Maker order side")


class Candle(BaseModel):
    """
    OHLCV candlestick

    Normalized from the exchange's positional
    [time, low, high, open, close, volume] rows.
    """

    model_config = ConfigDict(frozen=True)

    open: Decimal = Field(description="Opening price (first trade) in the bucket interval")
    high: Decimal = Field(description="Highest price during the bucket interval")
    low: Decimal = Field(description="Lowest price during the bucket interval")
    close: Decimal = Field(description="Closing price (last trade) in the bucket interval")
    volume: Decimal = Field(description="Volume of trading activity during the bucket interval")
    time_ms: int = Field(description="Bucket start time in epoch milliseconds")
    time_iso: str = Field(description="Bucket start time, ISO 8601 UTC (2020-03-09T00:00:00.000Z)")


class CandlesRequest(BaseModel):
    """Historic rates query; start/end are inclusive"""

    start: datetime | str | None = Field(default=None, description="Start time, ISO 8601")
    end: datetime | str | None = Field(default=None, description="End time, ISO 8601")
    # Checked by validate_granularity() so bad values raise InvalidGranularityError
    granularity: Any = Field(default=None, description="Bucket size in seconds")


def _order_count(value):
    # Numeric counts become int; anything else (a level-3 order id) is kept as sent
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


OrderCount = Annotated[int | str, BeforeValidator(_order_count)]


class AggregatedOrder(NamedTuple):
    """One price level of an aggregated (level 1/2) book"""

    price: Decimal
    total_size: Decimal
    order_count: OrderCount


class NonAggregatedOrder(NamedTuple):
    """One resting order of a full (level 3) book"""

    price: Decimal
    size: Decimal
    order_id: str


class _OrderBookSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    sequence: int = Field(description="Increasing sequence number for the product")

    @property
    def best_bid(self) -> AggregatedOrder | NonAggregatedOrder | None:
        """Get best bid (highest buy price)"""
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> AggregatedOrder | NonAggregatedOrder | None:
        """Get best ask (lowest sell price)"""
        return self.asks[0] if self.asks else None

    @property
    def spread(self) -> Decimal:
        """Calculate bid-ask spread"""
        if not self.bids or not self.asks:
            return Decimal(0)
        return self.asks[0].price - self.bids[0].price


class OrderBookLevel1(_OrderBookSnapshot):
    """Only the best bid and ask (aggregated)"""

    bids: list[AggregatedOrder]
    asks: list[AggregatedOrder]


class OrderBookLevel2(_OrderBookSnapshot):
    """Top 50 bids and asks (aggregated); fewer when the book is thinner"""

    bids: list[AggregatedOrder]
    asks: list[AggregatedOrder]


class OrderBookLevel3(_OrderBookSnapshot):
    """
    Full order book (non aggregated)

    Only recommended for maintaining a real-time book alongside the
    websocket feed; polling it aggressively gets access throttled.
    """

    bids: list[NonAggregatedOrder]
    asks: list[NonAggregatedOrder]


OrderBook = OrderBookLevel1 | OrderBookLevel2 | OrderBookLevel3
