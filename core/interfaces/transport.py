"""
Abstract base class for HTTP transports

The market data client never talks to the network itself; it asks a
transport for decoded JSON.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseHttpTransport(ABC):
    """
    Abstract HTTP transport

    Implementations resolve paths against their base URL, decode the JSON
    response body and retry transient failures. Errors that survive the
    retry policy are raised to the caller unmodified.

    Implementations:
    - CcxtHttpTransport (providers/coinbase/transport.py)
    """

    @abstractmethod
    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Issue a GET request and return the decoded JSON body

        Args:
            path: Resource path relative to the base URL (e.g. "products/BTC-USD/book")
            params: Query parameters, forwarded as-is

        Returns:
            Decoded JSON (list or dict)
        """

    @abstractmethod
    async def close(self) -> None:
        """Release network resources"""
