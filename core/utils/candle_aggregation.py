"""
Candle aggregation across bucketed historic rate requests

Fetches one page of raw candles per planned bucket, decodes the compact
positional rows into Candle models and merges everything into a single
ascending series.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from decimal import Decimal

from core.interfaces.transport import BaseHttpTransport
from core.models.market_data import Candle, CandleGranularity
from core.utils.candle_buckets import Bucket, to_iso

logger = logging.getLogger(__name__)

# [time_seconds, low, high, open, close, volume]
RawCandle = Sequence[float | int | str]

BucketFetcher = Callable[[Bucket], Awaitable[list[RawCandle]]]


def decode_candle(raw: RawCandle) -> Candle:
    """
    Decode one positional wire row into a Candle

    Example:
        >>> candle = decode_candle([1583712000, 7800.1, 8000.0, 7900.5, 7950.0, 12.5])
        >>> candle.time_ms, candle.time_iso
        (1583712000000, '2020-03-09T00:00:00.000Z')
    """
    if len(raw) != 6:
        raise ValueError(f"Expected 6 fields in raw candle, got {len(raw)}: {raw!r}")

    time_s, low, high, open_, close, volume = raw
    time_ms = int(time_s) * 1000  # exchange reports seconds

    return Candle(
        open=Decimal(str(open_)),
        high=Decimal(str(high)),
        low=Decimal(str(low)),
        close=Decimal(str(close)),
        volume=Decimal(str(volume)),
        time_ms=time_ms,
        time_iso=to_iso(time_ms),
    )


def merge_candles(batches: Iterable[Iterable[Candle]]) -> list[Candle]:
    """
    Concatenate per-bucket candles into one ascending, duplicate-free series

    Consecutive buckets share a boundary instant which the exchange treats
    as inclusive on both sides, so the same bucket start may come back
    twice. The first occurrence wins.
    """
    merged = sorted(
        (candle for batch in batches for candle in batch),
        key=lambda c: c.time_ms,
    )

    series = []
    last_time_ms = None
    for candle in merged:
        if candle.time_ms == last_time_ms:
            continue
        series.append(candle)
        last_time_ms = candle.time_ms

    duplicates = len(merged) - len(series)
    if duplicates:
        logger.debug(f"Dropped {duplicates} duplicate boundary candles")
    return series


class CandleAggregator:
    """
    Sequential multi-bucket candle fetcher

    Buckets are requested one at a time in planner order. A failing bucket
    fails the whole series: a merged history missing an interior bucket
    would silently misrepresent the range.
    """

    def __init__(self, transport: BaseHttpTransport):
        self.transport = transport

    async def fetch(
        self, product_id: str, bucket: Bucket, granularity: CandleGranularity
    ) -> list[RawCandle]:
        """Fetch the raw candle rows of a single bucket"""
        params = {
            "start": bucket.start_iso,
            "end": bucket.end_iso,
            "granularity": int(granularity),
        }
        logger.debug(f"Fetching candles for {product_id}: {params}")
        return await self.transport.get(f"products/{product_id}/candles", params)

    async def aggregate(self, buckets: Sequence[Bucket], fetcher: BucketFetcher) -> list[Candle]:
        """
        Fetch every bucket in order and merge the decoded results

        Args:
            buckets: Buckets from plan_buckets(), ascending
            fetcher: Async callable returning the raw rows of one bucket

        Returns:
            Ascending, duplicate-free list of Candle objects

        Raises:
            Whatever the fetcher raises, unmodified. Cancellation stops
            any remaining bucket requests.
        """
        batches = []
        for index, bucket in enumerate(buckets, start=1):
            rows = await fetcher(bucket)
            batches.append([decode_candle(row) for row in rows])
            logger.debug(
                f"Bucket {index}/{len(buckets)} ({bucket.start_iso} to {bucket.end_iso}): "
                f"{len(rows)} candles"
            )

        return merge_candles(batches)

    async def fetch_series(
        self, product_id: str, buckets: Sequence[Bucket], granularity: CandleGranularity
    ) -> list[Candle]:
        """aggregate() over transport fetches for one product"""

        async def _fetch(bucket: Bucket) -> list[RawCandle]:
            return await self.fetch(product_id, bucket, granularity)

        return await self.aggregate(buckets, _fetch)
