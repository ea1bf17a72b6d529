"""StarfighterClient - authenticated HTTP client for the Starfighter API

Every call is an independent, blocking request/response round trip. The
client keeps no state besides its configuration and the transport, so one
instance can be shared between threads.
"""

from dataclasses import dataclass
from typing import Any, Iterator, TypeVar

import httpx
from loguru import logger
from pydantic import BaseModel, ValidationError

from .config import AUTH_HEADER, ClientConfig
from .exceptions import APIError, DecodeError, StarfighterError, TransportError
from .logging_bridge import log_request, log_response
from .models import (
    OrderBook,
    OrderRequest,
    OrderResult,
    OrderResultList,
    Stock,
    StockList,
    StockQuote,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class CallResult:
    """Decoded envelope of a successful call

    ``raw`` is the untouched response body, kept so callers can decode the
    same payload into a more specific structure. Unpacks as ``(data, raw)``.
    """

    status_code: int
    data: dict[str, Any]
    raw: bytes

    def __iter__(self) -> Iterator[Any]:
        yield self.data
        yield self.raw

    def decode(self, model: type[ModelT]) -> ModelT:
        """Decode the raw body into ``model``

        Raises:
            DecodeError: If the body does not match the model's shape
        """
        try:
            return model.model_validate_json(self.raw)
        except ValidationError as e:
            raise DecodeError(
                f"Response does not match {model.__name__}: {e}"
            ) from e


class StarfighterClient:
    """HTTP REST client to the Starfighter API

    Errors:
    - TransportError: the client (or the network) failed, no response
    - APIError: the API processed the request and answered ok = false
    - DecodeError: the response is not the JSON shape asked for
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize client

        Args:
            config: Token and API location
            http_client: Transport to send requests through. When omitted the
                client builds (and owns) one using ``config.timeout``.
        """
        self._config = config
        self._owns_http_client = http_client is None
        self._http_client = (
            http_client
            if http_client is not None
            else self._build_http_client(config.timeout)
        )

    def _build_http_client(self, timeout: float) -> httpx.Client:
        """Create a Client with request/response logging hooks."""
        return httpx.Client(
            timeout=timeout,
            event_hooks={
                "request": [log_request],
                "response": [log_response],
            },
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def close(self) -> None:
        """Close the transport if this client created it"""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "StarfighterClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def call_request(self, request: httpx.Request) -> httpx.Response:
        """Set the authorization header and send the request

        Raises:
            TransportError: If no response was received
        """
        request.headers[AUTH_HEADER] = self._config.token
        try:
            return self._http_client.send(request)
        except httpx.RequestError as e:
            logger.debug(f"Transport error on {request.method} {request.url}: {e}")
            raise TransportError(
                f"{request.method} {request.url} failed: {e}"
            ) from e

    def call(
        self,
        method: str,
        path: str,
        payload: Any = None,
    ) -> CallResult:
        """Call an endpoint and decode the generic JSON envelope

        Args:
            method: HTTP method (GET, POST, DELETE)
            path: Endpoint path relative to the API location
            payload: JSON-serializable request body, or None to send no body

        Returns:
            CallResult with the decoded object and the raw body

        Raises:
            TransportError: If the request could not be built or sent
            DecodeError: If the body is not a JSON object
            APIError: If the body reports ok = false
        """
        url = f"{self._config.base_url}{path}"
        try:
            request = self._http_client.build_request(
                method.upper(), url, json=payload
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise TransportError(f"Malformed request {method} {url}: {e}") from e

        response = self.call_request(request)
        raw = response.content

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Response from {method} {path} is not JSON "
                f"(status {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise DecodeError(
                f"Response from {method} {path} is not a JSON object"
            )

        # only a literal false is a failure; missing or odd values pass
        if data.get("ok") is False:
            error = data.get("error")
            message = error if isinstance(error, str) else str(error or "")
            logger.debug(
                f"API error on {method} {path} ({response.status_code}): {message}"
            )
            raise APIError(response.status_code, message)

        return CallResult(response.status_code, data, raw)

    def _is_up(self, path: str) -> bool:
        try:
            self.call("GET", path)
        except StarfighterError as e:
            logger.debug(f"Health check {path} failed: {e}")
            return False
        return True

    def heartbeat(self) -> bool:
        """Check if the API is up"""
        return self._is_up("/heartbeat")

    def venue_health_check(self, venue: str) -> bool:
        """Check if a venue is up"""
        return self._is_up(f"/venues/{venue}/heartbeat")

    def list_venue_stocks(self, venue: str) -> list[Stock]:
        """List the stocks traded on a venue"""
        result = self.call("GET", f"/venues/{venue}/stocks")
        return result.decode(StockList).symbols

    def get_stock_orderbook(self, venue: str, stock: str) -> OrderBook:
        """Retrieve the order book for a stock"""
        result = self.call("GET", f"/venues/{venue}/stocks/{stock}")
        return result.decode(OrderBook)

    def place_stock_order(
        self,
        account: str,
        venue: str,
        stock: str,
        price: int,
        qty: int,
        direction: str,
        order_type: str,
    ) -> OrderResult:
        """Place an order for a stock

        Args:
            account: Trading account
            venue: Venue code
            stock: Stock symbol
            price: Limit price in cents (ignored by the venue for market orders)
            qty: Number of shares
            direction: "buy" or "sell"
            order_type: "limit", "market", "fill-or-kill" or "immediate-or-cancel"

        Returns:
            The order as accepted by the venue
        """
        order = OrderRequest.model_construct(
            account=account,
            venue=venue,
            stock=stock,
            price=price,
            qty=qty,
            direction=direction,
            order_type=order_type,
        )
        result = self.call(
            "POST",
            f"/venues/{venue}/stocks/{stock}/orders",
            order.to_payload(),
        )
        return result.decode(OrderResult)

    def quote_stock(self, venue: str, stock: str) -> StockQuote:
        """Get the most recent quote for a stock"""
        result = self.call("GET", f"/venues/{venue}/stocks/{stock}/quote")
        return result.decode(StockQuote)

    def get_order_status(
        self, venue: str, stock: str, order_id: int
    ) -> OrderResult:
        """Retrieve the status of an existing order"""
        result = self.call(
            "GET", f"/venues/{venue}/stocks/{stock}/orders/{order_id}"
        )
        return result.decode(OrderResult)

    def cancel_order(self, venue: str, stock: str, order_id: int) -> OrderResult:
        """Cancel an order; the result reflects any fills before the cancel"""
        result = self.call(
            "DELETE", f"/venues/{venue}/stocks/{stock}/orders/{order_id}"
        )
        return result.decode(OrderResult)

    def list_venue_order_status(
        self, venue: str, account: str
    ) -> OrderResultList:
        """List the status of all orders for the account on a venue"""
        result = self.call("GET", f"/venues/{venue}/accounts/{account}/orders")
        return result.decode(OrderResultList)

    def list_venue_stock_order_status(
        self, venue: str, stock: str, account: str
    ) -> OrderResultList:
        """List the status of all orders for the account in one stock"""
        result = self.call(
            "GET", f"/venues/{venue}/accounts/{account}/stocks/{stock}/orders"
        )
        return result.decode(OrderResultList)
