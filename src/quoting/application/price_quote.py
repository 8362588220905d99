"""Application service: Price Quote use case.

Maps the caller's raw spec onto domain values, runs the pricing engine
and renders the result as a DTO.  This is the layer that logs; the
engine itself stays silent.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from quoting.application.dto import QuoteDTO, QuoteLineItemDTO, QuoteSpec
from quoting.domain.exceptions import QuoteValidationError
from quoting.domain.model.quote import LineItem, QuoteRequest, QuoteTotals, SummationMode
from quoting.domain.model.value_objects import round2
from quoting.domain.service.pricing_engine import compute

logger = structlog.get_logger(__name__)


class PriceQuoteHandler:

    def __init__(self, mode: SummationMode = SummationMode.EXACT) -> None:
        self._mode = mode

    def handle(self, spec: QuoteSpec) -> QuoteDTO:
        """Price a proposed quote.

        Steps:
        1. Coerce every number to an exact Decimal (TypeError/ValueError
           for non-numbers; those are caller bugs, not quote errors).
        2. Let the pricing engine validate and compute.
        3. Log the outcome and return a DTO.
        """
        request = self._to_request(spec)

        try:
            totals = compute(request, mode=self._mode)
        except QuoteValidationError as exc:
            logger.warning(
                "quote_rejected",
                code=exc.code,
                error=type(exc).__name__,
                reason=str(exc),
                index=exc.index,
            )
            raise

        logger.info(
            "quote_priced",
            items=len(totals.items),
            currency=totals.currency_code,
            subtotal=totals.subtotal,
            total=totals.total,
            summation=self._mode.value,
        )
        return self._to_dto(request, totals, spec.notes)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_request(spec: QuoteSpec) -> QuoteRequest:
        items = [
            LineItem(
                kind=item.kind,
                name=item.name,
                quantity=item.qty,  # type: ignore[arg-type]
                unit=item.unit,
                unit_price=item.unit_price,  # type: ignore[arg-type]
            )
            for item in spec.items
        ]
        return QuoteRequest(
            items=tuple(items),
            labor_hours=spec.labor_hours,  # type: ignore[arg-type]
            labor_rate=spec.labor_rate,  # type: ignore[arg-type]
            margin_pct=spec.margin_pct,  # type: ignore[arg-type]
            tax_pct=spec.tax_pct,  # type: ignore[arg-type]
            currency_code=spec.currency,
        )

    def _to_dto(self, request: QuoteRequest, totals: QuoteTotals, notes: str | None) -> QuoteDTO:
        return QuoteDTO(
            items=[
                QuoteLineItemDTO(
                    kind=item.kind,
                    name=item.name,
                    qty=_plain(item.quantity),
                    unit=item.unit,
                    unit_price=_plain(item.unit_price),
                    line_total=item.line_total,
                )
                for item in totals.items
            ],
            # inputs are echoed with two decimals, as stored alongside a quote
            labor_hours=round2(request.labor_hours),
            labor_rate=round2(request.labor_rate),
            margin_pct=round2(request.margin_pct),
            tax_pct=round2(request.tax_pct),
            subtotal=totals.subtotal,
            total=totals.total,
            currency=totals.currency_code,
            notes=notes,
            summation=self._mode.value,
        )


def _plain(value: Decimal) -> str:
    """Render a quantity without exponent notation: 1E+1 -> "10"."""
    return f"{value:f}"
