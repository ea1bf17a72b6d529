"""Pydantic models for Starfighter API payloads

This module mirrors the JSON shapes returned by the Starfighter API. Attribute
names are snake_case; the camelCase wire names are mapped with aliases, and
every model also accepts its attribute names on construction.
"""

import re
from datetime import datetime
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

_SUBMICROSECOND = re.compile(r"(\.\d{6})\d+")


def _truncate_nanoseconds(value: object) -> object:
    """Drop fractional digits past microseconds (the API sends nanoseconds)"""
    if isinstance(value, str):
        return _SUBMICROSECOND.sub(r"\1", value, count=1)
    return value


Timestamp = Annotated[datetime, BeforeValidator(_truncate_nanoseconds)]


class WireModel(BaseModel):
    """Base for decoded API records"""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore"
    )


class Stock(WireModel):
    """A symbol listed on a venue"""

    name: str
    symbol: str


class StockList(WireModel):
    """Envelope of the venue stock listing"""

    symbols: list[Stock]


class StockQuote(WireModel):
    """Most recent quote for a stock

    The API leaves out bid/ask/last when that side of the book (or the tape)
    is empty.
    """

    symbol: str
    venue: str
    bid: int | None = None
    ask: int | None = None
    bid_size: int = Field(0, alias="bidSize")
    ask_size: int = Field(0, alias="askSize")
    bid_depth: int = Field(0, alias="bidDepth")
    ask_depth: int = Field(0, alias="askDepth")
    last: int | None = None
    last_size: int | None = Field(None, alias="lastSize")
    last_trade: Timestamp | None = Field(None, alias="lastTrade")
    quote_time: Timestamp | None = Field(None, alias="quoteTime")

    @property
    def mid_price(self) -> float | None:
        """Calculate mid price from bid/ask"""
        if self.bid is not None and self.ask is not None:
            return (self.bid + self.ask) / 2
        return None

    @property
    def spread(self) -> int | None:
        """Calculate bid-ask spread"""
        if self.bid is not None and self.ask is not None:
            return self.ask - self.bid
        return None


class BookEntry(WireModel):
    """One resting order level in an order book"""

    is_buy: bool = Field(..., alias="isBuy")
    price: int
    qty: int


class OrderBook(WireModel):
    """Outstanding bids and asks for a stock, best price first"""

    symbol: str
    venue: str
    ts: Timestamp
    asks: list[BookEntry] = Field(default_factory=list)
    bids: list[BookEntry] = Field(default_factory=list)

    @field_validator("asks", "bids", mode="before")
    @classmethod
    def empty_side(cls, v):
        """An empty side of the book arrives as null"""
        return [] if v is None else v

    @property
    def best_bid(self) -> BookEntry | None:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> BookEntry | None:
        return self.asks[0] if self.asks else None


class Fill(WireModel):
    """A (partial) execution of an order"""

    price: int
    qty: int
    ts: Timestamp


class OrderResult(WireModel):
    """State of an order as reported by the venue

    The order endpoints disagree on the name of the order type field: order
    placement answers with ``orderType`` while status, cancel and list
    endpoints have used ``type``. Both land in ``order_type``.
    """

    symbol: str
    venue: str
    direction: str
    original_qty: int = Field(..., alias="originalQty")
    qty: int
    price: int
    order_type: str = Field(
        ...,
        validation_alias=AliasChoices("orderType", "type", "order_type"),
        serialization_alias="orderType",
    )
    id: int
    account: str
    ts: Timestamp
    fills: list[Fill] = Field(default_factory=list)
    total_filled: int = Field(0, alias="totalFilled")
    open: bool

    @field_validator("fills", mode="before")
    @classmethod
    def no_fills(cls, v):
        return [] if v is None else v


class OrderResultList(WireModel):
    """Orders for an account on a venue"""

    venue: str | None = None
    orders: list[OrderResult] = Field(default_factory=list)

    @field_validator("orders", mode="before")
    @classmethod
    def no_orders(cls, v):
        return [] if v is None else v


class OrderRequest(WireModel):
    """Request body for order placement

    Field order is the wire order of the POST body. Built with
    ``model_construct`` so values reach the venue as given; the venue does
    the rejecting.
    """

    account: str
    venue: str
    stock: str
    price: int
    qty: int
    direction: str
    order_type: str = Field(..., alias="orderType")

    def to_payload(self) -> dict:
        return {
            field.alias or name: getattr(self, name)
            for name, field in type(self).model_fields.items()
        }
