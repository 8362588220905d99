"""Tests for the PriceQuote use case."""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from quoting.application.dto import QuoteItemSpec, QuoteSpec
from quoting.application.price_quote import PriceQuoteHandler
from quoting.domain.exceptions import MissingItemName, PercentageOutOfRange
from quoting.domain.model.quote import SummationMode


def _spec(**overrides) -> QuoteSpec:
    fields = dict(
        items=[
            QuoteItemSpec(name="Tile", qty=2, unit_price="10.00", unit="box", kind="material"),
        ],
        labor_hours=1,
        labor_rate="5.00",
        margin_pct=10,
        tax_pct=8,
        currency="usd",
    )
    fields.update(overrides)
    return QuoteSpec(**fields)


class TestPriceQuoteHappyPath:

    def test_renders_totals(self):
        dto = PriceQuoteHandler().handle(_spec())
        assert dto.subtotal == "27.50"
        assert dto.total == "29.70"
        assert dto.currency == "USD"
        assert dto.summation == "exact"

    def test_renders_line_items(self):
        item = PriceQuoteHandler().handle(_spec()).items[0]
        assert item.name == "Tile"
        assert item.kind == "material"
        assert item.unit == "box"
        assert item.qty == "2"
        assert item.unit_price == "10.00"
        assert item.line_total == "20.00"

    def test_echoes_inputs_with_two_decimals(self):
        dto = PriceQuoteHandler().handle(_spec(margin_pct="12.5", tax_pct=Decimal("8")))
        assert dto.labor_hours == "1.00"
        assert dto.labor_rate == "5.00"
        assert dto.margin_pct == "12.50"
        assert dto.tax_pct == "8.00"

    def test_unit_price_not_rounded_for_display(self):
        dto = PriceQuoteHandler().handle(_spec(items=[QuoteItemSpec("Screw", 1000, "0.125")]))
        assert dto.items[0].unit_price == "0.125"
        assert dto.items[0].line_total == "125.00"

    def test_quantity_rendered_without_exponent(self):
        dto = PriceQuoteHandler().handle(_spec(items=[QuoteItemSpec("Sand", Decimal("1E+1"), 1)]))
        assert dto.items[0].qty == "10"

    def test_notes_passed_through(self):
        dto = PriceQuoteHandler().handle(_spec(notes="Kitchen backsplash"))
        assert dto.notes == "Kitchen backsplash"
        assert dto.to_dict()["notes"] == "Kitchen backsplash"

    def test_to_dict_shape(self):
        data = PriceQuoteHandler().handle(_spec()).to_dict()
        assert data["items"] == [
            {
                "kind": "material",
                "name": "Tile",
                "qty": "2",
                "unit": "box",
                "unit_price": "10.00",
                "line_total": "20.00",
            }
        ]
        assert data["subtotal"] == "27.50"
        assert data["total"] == "29.70"
        assert data["currency"] == "USD"

    def test_rounded_items_mode(self):
        items = [QuoteItemSpec(f"Washer {i}", 1, "0.005") for i in range(3)]
        spec = _spec(items=items, labor_hours=0, margin_pct=0, tax_pct=0)
        exact = PriceQuoteHandler().handle(spec)
        rounded = PriceQuoteHandler(SummationMode.ROUNDED_ITEMS).handle(spec)
        assert exact.subtotal == "0.02"
        assert rounded.subtotal == "0.03"
        assert rounded.summation == "rounded_items"


class TestPriceQuoteErrors:

    def test_validation_error_propagates(self):
        spec = _spec(items=[QuoteItemSpec("Tile", 1, 1), QuoteItemSpec(" ", 1, 1)])
        with pytest.raises(MissingItemName, match=r"items\[1\]\.name"):
            PriceQuoteHandler().handle(spec)

    def test_non_number_is_a_type_error(self):
        with pytest.raises(TypeError):
            PriceQuoteHandler().handle(_spec(items=[QuoteItemSpec("Tile", None, 1)]))  # type: ignore[arg-type]


class TestPriceQuoteLogging:

    def test_logs_priced_quote(self):
        with capture_logs() as logs:
            PriceQuoteHandler().handle(_spec())
        assert logs == [
            {
                "event": "quote_priced",
                "log_level": "info",
                "items": 1,
                "currency": "USD",
                "subtotal": "27.50",
                "total": "29.70",
                "summation": "exact",
            }
        ]

    def test_logs_rejection(self):
        with capture_logs() as logs:
            with pytest.raises(PercentageOutOfRange):
                PriceQuoteHandler().handle(_spec(tax_pct=150))
        assert len(logs) == 1
        assert logs[0]["event"] == "quote_rejected"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["error"] == "PercentageOutOfRange"
        assert logs[0]["code"] == "validation_error"
        assert logs[0]["index"] is None
