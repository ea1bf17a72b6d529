"""Starfighter API client

StarfighterClient - authenticated calls to venue, stock and order endpoints
ClientConfig - token and API location
"""

from loguru import logger

from .client import CallResult, StarfighterClient
from .config import API_LOCATION, AUTH_HEADER, ClientConfig
from .exceptions import APIError, DecodeError, StarfighterError, TransportError
from .logging_bridge import install_logging_bridge
from .models import (
    BookEntry,
    Fill,
    OrderBook,
    OrderRequest,
    OrderResult,
    OrderResultList,
    Stock,
    StockQuote,
)

logger.disable("starfighter")

__all__ = [
    "API_LOCATION",
    "AUTH_HEADER",
    "APIError",
    "BookEntry",
    "CallResult",
    "ClientConfig",
    "DecodeError",
    "Fill",
    "OrderBook",
    "OrderRequest",
    "OrderResult",
    "OrderResultList",
    "StarfighterClient",
    "StarfighterError",
    "Stock",
    "StockQuote",
    "TransportError",
    "install_logging_bridge",
]
