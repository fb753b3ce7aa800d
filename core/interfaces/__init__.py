"""Interfaces module - Abstract base classes for market data clients"""

from .market_data import BaseProductAPI
from .transport import BaseHttpTransport

__all__ = [
    "BaseHttpTransport",
    "BaseProductAPI",
]
