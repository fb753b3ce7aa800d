#!/usr/bin/env python3
"""
Fetch historic candles from Coinbase Exchange and print them as CSV

Ranges longer than 300 candles are fetched in several sequential requests.

Usage:
    python scripts/fetch_candles.py BTC-USD \
        --start 2020-03-09T00:00:00.000Z --end 2020-03-15T23:59:59.999Z --granularity 3600
"""

import argparse
import asyncio
import csv
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from factory.client_factory import create_product_api

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


async def main(args: argparse.Namespace) -> None:
    """Fetch and write candles"""
    async with create_product_api() as api:
        candles = await api.get_candles(
            args.product_id,
            start=args.start,
            end=args.end,
            granularity=args.granularity,
        )

    writer = csv.writer(sys.stdout)
    writer.writerow(["time", "open", "high", "low", "close", "volume"])
    for candle in candles:
        writer.writerow(
            [candle.time_iso, candle.open, candle.high, candle.low, candle.close, candle.volume]
        )
    logger.info(f"✓ Wrote {len(candles)} candles for {args.product_id}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Download historic candles from Coinbase Exchange")
    parser.add_argument("product_id", help="Product ID, e.g. BTC-USD")
    parser.add_argument("--start", help="Start time (inclusive), ISO 8601")
    parser.add_argument("--end", help="End time (inclusive), ISO 8601")
    parser.add_argument(
        "--granularity",
        type=int,
        default=3600,
        help="Candle size in seconds: 60, 300, 900, 3600, 21600 or 86400",
    )
    asyncio.run(main(parser.parse_args()))
