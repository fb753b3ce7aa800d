"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: the product API only sees a BaseHttpTransport
"""

import logging

from core.interfaces.market_data import BaseProductAPI
from core.interfaces.transport import BaseHttpTransport

logger = logging.getLogger(__name__)


def create_http_transport(exchange_name: str = "coinbase") -> BaseHttpTransport:
    """
    Create the HTTP transport for an exchange

    Base URL, timeout and retry policy come from config/providers/market_data.yaml
    (COINBASE_API_URL in .env overrides the base URL).

    Raises:
        ValueError: If exchange_name is not supported
    """
    exchange_lower = exchange_name.lower()

    if exchange_lower == "coinbase":
        from providers.coinbase.transport import CcxtHttpTransport

        logger.info("✓ Creating CcxtHttpTransport (coinbase)")
        return CcxtHttpTransport()

    raise ValueError(f"Unknown exchange: {exchange_name}. Supported: coinbase")


def create_product_api(
    exchange_name: str = "coinbase", transport: BaseHttpTransport | None = None
) -> BaseProductAPI:
    """
    Factory method for product market data clients

    Args:
        exchange_name: Exchange identifier ("coinbase")
        transport: Optional transport to inject (tests, custom retry policy)

    Returns:
        BaseProductAPI implementation for the specified exchange

    Examples:
        >>> api = create_product_api()
        >>> book = await api.get_product_order_book("BTC-USD", level=2)
        >>> await api.close()

    Raises:
        ValueError: If exchange_name is not supported
    """
    exchange_lower = exchange_name.lower()

    if exchange_lower == "coinbase":
        from providers.coinbase.rest_api import CoinbaseProductAPI

        logger.info("✓ Creating CoinbaseProductAPI")
        return CoinbaseProductAPI(transport or create_http_transport(exchange_lower))

    raise ValueError(f"Unknown exchange: {exchange_name}. Supported: coinbase")
