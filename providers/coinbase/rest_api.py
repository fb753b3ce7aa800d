"""
Coinbase Exchange product REST API client

Public market data: products, historic candles, order book, trades,
24h stats and ticker. Responses are decoded into pydantic models.
"""

import logging
from typing import Literal, overload

from pydantic import TypeAdapter

from core.interfaces.market_data import BaseProductAPI
from core.interfaces.transport import BaseHttpTransport
from core.models.market_data import (
    Candle,
    CandlesRequest,
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
from core.utils.candle_aggregation import CandleAggregator, decode_candle, merge_candles
from core.utils.candle_buckets import plan_buckets, to_iso, to_millis, validate_granularity

logger = logging.getLogger(__name__)

# Decode model per requested level; the payload itself carries no shape tag
ORDER_BOOK_MODELS: dict[OrderBookLevel, type[OrderBook]] = {
    OrderBookLevel.ONLY_BEST_BID_AND_ASK: OrderBookLevel1,
    OrderBookLevel.TOP_50_BIDS_AND_ASKS: OrderBookLevel2,
    OrderBookLevel.FULL_ORDER_BOOK: OrderBookLevel3,
}

_products_adapter = TypeAdapter(list[Product])
_trades_adapter = TypeAdapter(list[Trade])


class CoinbaseProductAPI(BaseProductAPI):
    """
    Coinbase Exchange product market data client

    Historic rates are limited to 300 candles per request; get_candles()
    transparently splits longer ranges into sequential requests.
    """

    URL_PRODUCTS = "products"

    def __init__(self, transport: BaseHttpTransport):
        super().__init__(exchange_name="coinbase")
        self.transport = transport
        self.aggregator = CandleAggregator(transport)
        logger.info("CoinbaseProductAPI initialized")

    def _resource(self, product_id: str, name: str) -> str:
        return f"{self.URL_PRODUCTS}/{product_id}/{name}"

    async def get_candles(
        self, product_id: str, params: CandlesRequest | None = None, **kwargs
    ) -> list[Candle]:
        """
        Get historic rates for a product

        When start, end and granularity are all given the range is planned
        into buckets of at most 300 candles, fetched one after another and
        merged. Otherwise a single request is issued with the parameters
        forwarded as-is.

        Args:
            product_id: Product ID (e.g., "BTC-USD")
            params: CandlesRequest; start/end/granularity keywords override its fields

        Returns:
            Candles ascending by time, one per bucket start

        Raises:
            InvalidGranularityError: Before any request, if granularity is not accepted

        Example:
            >>> candles = await api.get_candles(
            ...     "BTC-USD",
            ...     start="2020-03-09T00:00:00.000Z",
            ...     end="2020-03-15T23:59:59.999Z",
            ...     granularity=60,
            ... )  # 34 requests, one ascending series
        """
        if params is not None:
            kwargs = {**params.model_dump(exclude_unset=True), **kwargs}
        request = CandlesRequest(**kwargs)
        resource = self._resource(product_id, "candles")

        granularity = None
        if request.granularity is not None:
            granularity = validate_granularity(request.granularity)

        try:
            if request.start is not None and request.end is not None and granularity:
                buckets = plan_buckets(
                    to_millis(request.start), to_millis(request.end), granularity
                )
                candles = await self.aggregator.fetch_series(product_id, buckets, granularity)
                logger.info(
                    f"Fetched {len(candles)} candles for {product_id} {int(granularity)}s "
                    f"in {len(buckets)} requests"
                )
                return candles

            query = request.model_dump(exclude_none=True)
            for key in ("start", "end"):
                if key in query and not isinstance(query[key], str):
                    query[key] = to_iso(to_millis(query[key]))
            if granularity:
                query["granularity"] = int(granularity)
            rows = await self.transport.get(resource, query)
            candles = merge_candles([[decode_candle(row) for row in rows]])
            logger.info(f"Fetched {len(candles)} candles for {product_id}")
            return candles

        except Exception as e:
            logger.error(f"Failed to fetch candles for {product_id}: {e}")
            raise

    async def get_products(self) -> list[Product]:
        """Get a list of available currency pairs for trading"""
        data = await self.transport.get(self.URL_PRODUCTS)
        return _products_adapter.validate_python(data)

    async def get_trades(self, product_id: str) -> list[Trade]:
        """Get latest trades for a product"""
        data = await self.transport.get(self._resource(product_id, "trades"))
        return _trades_adapter.validate_python(data)

    @overload
    async def get_product_order_book(
        self, product_id: str, level: Literal[OrderBookLevel.ONLY_BEST_BID_AND_ASK] = ...
    ) -> OrderBookLevel1: ...

    @overload
    async def get_product_order_book(
        self, product_id: str, level: Literal[OrderBookLevel.TOP_50_BIDS_AND_ASKS]
    ) -> OrderBookLevel2: ...

    @overload
    async def get_product_order_book(
        self, product_id: str, level: Literal[OrderBookLevel.FULL_ORDER_BOOK]
    ) -> OrderBookLevel3: ...

    async def get_product_order_book(
        self, product_id: str, level: OrderBookLevel | int = OrderBookLevel.ONLY_BEST_BID_AND_ASK
    ) -> OrderBook:
        """
        Get the order book for a product

        The amount of detail is chosen by `level`; by default only the
        inside (best) bid and ask are returned. The response is decoded
        into the shape belonging to the requested level, never guessed
        from the payload.

        Args:
            product_id: Product ID (e.g., "BTC-USD")
            level: 1 (best bid/ask), 2 (top 50, aggregated), 3 (full, per order)

        Raises:
            ValueError: If level is not 1, 2 or 3 (no request is issued)
        """
        try:
            book_level = OrderBookLevel(level)
        except ValueError:
            raise ValueError(f"Unsupported order book level: {level!r}. Supported: 1, 2, 3") from None

        model = ORDER_BOOK_MODELS[book_level]
        data = await self.transport.get(
            self._resource(product_id, "book"), {"level": int(book_level)}
        )
        return model.model_validate(data)

    async def get_product_stats(self, product_id: str) -> ProductStats:
        """Get latest 24 hours of movement data for a product"""
        data = await self.transport.get(self._resource(product_id, "stats"))
        return ProductStats.model_validate(data)

    async def get_product_ticker(self, product_id: str) -> ProductTicker:
        """Get snapshot information about the last trade (tick), best bid/ask and 24h volume"""
        data = await self.transport.get(self._resource(product_id, "ticker"))
        return ProductTicker.model_validate(data)

    async def close(self) -> None:
        """Close the underlying transport"""
        await self.transport.close()
        logger.info("CoinbaseProductAPI closed")
