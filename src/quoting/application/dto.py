"""Plain containers passed between the CLI and the application layer.

Inputs hold numbers as the caller gave them; outputs hold every amount
already rendered as text, ready for a table or a JSON document.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

RawNumber = Union[int, str, float, Decimal]


@dataclass(frozen=True)
class QuoteItemSpec:
    """Input: one line of a proposed quote, numbers not yet checked."""

    name: str
    qty: RawNumber
    unit_price: RawNumber
    unit: str = ""
    kind: str = ""


@dataclass(frozen=True)
class QuoteSpec:
    """Input: a whole proposed quote as the caller supplied it."""

    items: list[QuoteItemSpec]
    labor_hours: RawNumber = 0
    labor_rate: RawNumber = 0
    margin_pct: RawNumber = 0
    tax_pct: RawNumber = 0
    currency: str = "USD"
    notes: str | None = None


@dataclass(frozen=True)
class QuoteLineItemDTO:
    """Output: a single priced line item as displayed to the user."""

    kind: str
    name: str
    qty: str
    unit: str
    unit_price: str
    line_total: str  # e.g. "20.00"


@dataclass(frozen=True)
class QuoteDTO:
    """Output: a priced quote, every number already rendered as text."""

    items: list[QuoteLineItemDTO]
    labor_hours: str
    labor_rate: str
    margin_pct: str
    tax_pct: str
    subtotal: str
    total: str
    currency: str
    notes: str | None = None
    summation: str = "exact"

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [
                {
                    "kind": item.kind,
                    "name": item.name,
                    "qty": item.qty,
                    "unit": item.unit,
                    "unit_price": item.unit_price,
                    "line_total": item.line_total,
                }
                for item in self.items
            ],
            "labor_hours": self.labor_hours,
            "labor_rate": self.labor_rate,
            "margin_pct": self.margin_pct,
            "tax_pct": self.tax_pct,
            "subtotal": self.subtotal,
            "total": self.total,
            "currency": self.currency,
            "notes": self.notes,
            "summation": self.summation,
        }
