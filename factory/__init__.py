"""Factory package - Dependency injection for market data clients"""

from .client_factory import create_http_transport, create_product_api

__all__ = [
    "create_http_transport",
    "create_product_api",
]
