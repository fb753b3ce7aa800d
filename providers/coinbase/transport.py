"""
Coinbase Exchange HTTP transport

Uses the ccxt library for base-URL resolution, JSON decoding and
client-side rate limiting; transient network failures are retried with
exponential backoff.
"""

import logging
from typing import Any

import ccxt.async_support as ccxt

from config.settings import get_settings
from core.interfaces.transport import BaseHttpTransport
from core.utils.retry import exponential_backoff

logger = logging.getLogger(__name__)

# Timeouts, exchange unavailability and DDoS throttling; all subclass NetworkError
TRANSIENT_ERRORS = (ccxt.NetworkError,)


class CcxtHttpTransport(BaseHttpTransport):
    """
    Public REST transport backed by ccxt's coinbaseexchange client

    Paths are relative to the public API root, e.g. "products/BTC-USD/candles".
    Non-transient ccxt errors (BadSymbol, BadRequest, ...) are raised at once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        max_attempts: int | None = None,
    ):
        settings = get_settings()

        self.base_url = (base_url or settings.REST_API_BASE_URL).rstrip("/")
        self.max_attempts = max_attempts or settings.REST_API_MAX_RETRIES
        self.initial_backoff = settings.REST_API_RETRY_BACKOFF_SECONDS
        self.max_backoff = settings.REST_API_RETRY_MAX_BACKOFF_SECONDS

        self.client = ccxt.coinbaseexchange(
            {
                "enableRateLimit": settings.REST_API_ENABLE_RATE_LIMIT,
                "timeout": timeout_ms or settings.REST_API_TIMEOUT_MS,
            }
        )
        self.client.urls["api"]["public"] = self.base_url
        logger.info(f"CcxtHttpTransport initialized ({self.base_url})")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a public resource and return the decoded JSON body"""
        path = path.lstrip("/")
        query = dict(params or {})

        async def _request():
            return await self.client.request(path, "public", "GET", query)

        try:
            return await exponential_backoff(
                _request,
                max_attempts=self.max_attempts,
                initial_delay=self.initial_backoff,
                max_delay=self.max_backoff,
                exceptions=TRANSIENT_ERRORS,
            )
        except ccxt.BaseError as e:
            logger.error(f"GET /{path} failed: {e}")
            raise

    async def close(self) -> None:
        """Close ccxt client"""
        await self.client.close()
        logger.info("CcxtHttpTransport closed")
