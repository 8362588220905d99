"""Quote request and result types.

Everything here is immutable.  Numbers are coerced to exact ``Decimal``
on construction; range and sign rules are left to the pricing engine so
that it can report the first violation in a fixed order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from quoting.domain.model.value_objects import Number, to_exact


class SummationMode(Enum):
    """How line items feed the subtotal.

    EXACT sums the unrounded products (reference behavior).  ROUNDED_ITEMS
    sums the displayed two-decimal line totals instead, so the printed
    lines always add up to the items part of the subtotal.
    """

    EXACT = "exact"
    ROUNDED_ITEMS = "rounded_items"


@dataclass(frozen=True)
class LineItem:
    """One priced entry of a proposed quote."""

    kind: str
    name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_exact(self.quantity))
        object.__setattr__(self, "unit_price", to_exact(self.unit_price))

    @staticmethod
    def of(
        name: str,
        quantity: Number,
        unit_price: Number,
        unit: str = "",
        kind: str = "",
    ) -> LineItem:
        return LineItem(kind=kind, name=name, quantity=quantity, unit=unit, unit_price=unit_price)  # type: ignore[arg-type]


@dataclass(frozen=True)
class PricedLineItem:
    """A line item with its rounded ``line_total`` attached."""

    kind: str
    name: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    line_total: str  # two decimals, half-up

    @staticmethod
    def from_item(item: LineItem, line_total: str) -> PricedLineItem:
        return PricedLineItem(
            kind=item.kind,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            unit_price=item.unit_price,
            line_total=line_total,
        )


@dataclass(frozen=True)
class QuoteRequest:
    items: tuple[LineItem, ...]
    labor_hours: Decimal = Decimal(0)
    labor_rate: Decimal = Decimal(0)
    margin_pct: Decimal = Decimal(0)
    tax_pct: Decimal = Decimal(0)
    currency_code: str = "USD"

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        for name in ("labor_hours", "labor_rate", "margin_pct", "tax_pct"):
            object.__setattr__(self, name, to_exact(getattr(self, name)))


@dataclass(frozen=True)
class QuoteTotals:
    """Computed quote: items in input order plus rendered totals."""

    items: tuple[PricedLineItem, ...]
    subtotal: str
    total: str
    currency_code: str = "USD"
