"""
Candle bucket planning for historic rate requests

The exchange returns at most PAGE_LIMIT candles per historic-rate request.
Longer ranges are split into contiguous buckets, each small enough to be
served by a single request.
"""

import logging
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, model_validator

from core.exceptions import InvalidGranularityError
from core.models.market_data import CandleGranularity

logger = logging.getLogger(__name__)

# Exchange-imposed maximum number of candles per historic-rate request
PAGE_LIMIT = 300


class Bucket(BaseModel):
    """
    Sub-interval of a candle request, both ends inclusive (epoch ms)
    """

    model_config = ConfigDict(frozen=True)

    start_ms: int
    end_ms: int

    @model_validator(mode="after")
    def _start_not_after_end(self):
        if self.start_ms > self.end_ms:
            raise ValueError(f"Bucket start {self.start_ms} is after end {self.end_ms}")
        return self

    @property
    def start_iso(self) -> str:
        return to_iso(self.start_ms)

    @property
    def end_iso(self) -> str:
        return to_iso(self.end_ms)


def validate_granularity(granularity) -> CandleGranularity:
    """
    Coerce a granularity to CandleGranularity

    Raises:
        InvalidGranularityError: If the value is not an accepted bucket size

    Example:
        >>> validate_granularity(3600)
        <CandleGranularity.ONE_HOUR: 3600>
    """
    # bool is an int subclass; True would otherwise look like a number of seconds
    if isinstance(granularity, bool):
        raise InvalidGranularityError(granularity)
    if isinstance(granularity, float) and not granularity.is_integer():
        raise InvalidGranularityError(granularity)
    try:
        return CandleGranularity(int(granularity))
    except (TypeError, ValueError):
        raise InvalidGranularityError(granularity) from None


def to_iso(ms: int) -> str:
    """Epoch milliseconds -> ISO 8601 UTC string with millisecond precision"""
    dt = datetime.fromtimestamp(ms / 1000, tz=UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_millis(value: datetime | str | int) -> int:
    """
    Convert an ISO 8601 string, datetime or epoch-ms int to epoch milliseconds

    Naive datetimes (and strings without an offset) are treated as UTC.
    """
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    # timedelta arithmetic keeps millisecond precision exact
    delta = value - datetime(1970, 1, 1, tzinfo=UTC)
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000


def plan_buckets(start_ms: int, end_ms: int, granularity) -> list[Bucket]:
    """
    Split [start_ms, end_ms] into request-sized buckets

    Each bucket spans at most PAGE_LIMIT candles of the given granularity.
    Consecutive buckets share their boundary instant; the final bucket may
    be shorter. A zero-width range yields exactly one zero-width bucket.

    Args:
        start_ms: Range start, epoch milliseconds (inclusive)
        end_ms: Range end, epoch milliseconds (inclusive)
        granularity: Candle size in seconds (one of CandleGranularity)

    Returns:
        Buckets in ascending time order

    Raises:
        InvalidGranularityError: If granularity is not accepted by the exchange
        ValueError: If start_ms > end_ms

    Example:
        >>> buckets = plan_buckets(0, 36_000_000, 60)  # 10 hours of 1m candles
        >>> len(buckets)
        2
        >>> buckets[0].end_ms == buckets[1].start_ms
        True
    """
    granularity = validate_granularity(granularity)
    if start_ms > end_ms:
        raise ValueError(f"Range start {start_ms} is after end {end_ms}")

    span_ms = int(granularity) * 1000 * PAGE_LIMIT

    if start_ms == end_ms:
        return [Bucket(start_ms=start_ms, end_ms=end_ms)]

    buckets = []
    cursor = start_ms
    while cursor < end_ms:
        bucket = Bucket(start_ms=cursor, end_ms=min(cursor + span_ms, end_ms))
        buckets.append(bucket)
        cursor = bucket.end_ms

    logger.debug(
        f"Planned {len(buckets)} buckets for {to_iso(start_ms)} to {to_iso(end_ms)} "
        f"at {int(granularity)}s"
    )
    return buckets


def buckets_to_iso(buckets: list[Bucket]) -> list[tuple[str, str]]:
    """Wire-format (start, end) pairs for a list of buckets"""
    return [(bucket.start_iso, bucket.end_iso) for bucket in buckets]
