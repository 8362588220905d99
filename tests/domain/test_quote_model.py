"""Unit tests for quote request and result types."""

import dataclasses
from decimal import Decimal

import pytest

from quoting.domain.model.quote import LineItem, PricedLineItem, QuoteRequest


class TestLineItem:

    def test_numbers_coerced_to_decimal(self):
        item = LineItem.of("Tile", "2", 10.5)
        assert item.quantity == Decimal("2")
        assert item.unit_price == Decimal("10.5")

    def test_immutable(self):
        item = LineItem.of("Tile", 1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.name = "Grout"  # type: ignore[misc]

    def test_non_number_rejected(self):
        with pytest.raises(TypeError):
            LineItem.of("Tile", None, 1)  # type: ignore[arg-type]


class TestPricedLineItem:

    def test_from_item_copies_fields(self):
        item = LineItem.of("Tile", 2, "10.00", unit="box", kind="material")
        priced = PricedLineItem.from_item(item, "20.00")
        assert priced.name == "Tile"
        assert priced.kind == "material"
        assert priced.unit == "box"
        assert priced.line_total == "20.00"


class TestQuoteRequest:

    def test_items_stored_as_tuple(self):
        items = [LineItem.of("Tile", 1, 1)]
        request = QuoteRequest(items=items)  # type: ignore[arg-type]
        items.append(LineItem.of("Grout", 1, 1))
        assert len(request.items) == 1

    def test_defaults(self):
        request = QuoteRequest(items=(LineItem.of("Tile", 1, 1),))
        assert request.labor_hours == Decimal(0)
        assert request.margin_pct == Decimal(0)
        assert request.currency_code == "USD"

    def test_percentages_coerced(self):
        request = QuoteRequest(items=(), margin_pct="12.5", tax_pct=8)  # type: ignore[arg-type]
        assert request.margin_pct == Decimal("12.5")
        assert request.tax_pct == Decimal(8)
