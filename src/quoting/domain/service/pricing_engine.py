"""Domain service: price a quote.

``compute`` is a pure function of its input.  It performs no I/O, keeps
no state between calls and never logs, so it can be called from any
number of threads at once.
"""

from __future__ import annotations

from decimal import Decimal

from quoting.domain.exceptions import (
    EmptyItems,
    MissingItemName,
    NegativeAmount,
    PercentageOutOfRange,
)
from quoting.domain.model.quote import (
    LineItem,
    PricedLineItem,
    QuoteRequest,
    QuoteTotals,
    SummationMode,
)
from quoting.domain.model.value_objects import (
    HUNDRED,
    ZERO,
    CurrencyCode,
    exact_arithmetic,
    pct_to_ratio,
    round2,
)


def compute(
    request: QuoteRequest,
    mode: SummationMode = SummationMode.EXACT,
) -> QuoteTotals:
    """Validate *request* and compute its line totals, subtotal and total.

    Raises the first ``QuoteValidationError`` found, checking in order:
    empty items, percentage range, currency code, then each item by index.

    Margin is applied to items + labor, tax to the margined subtotal.
    Rounding happens only when rendering; with ``SummationMode.EXACT``
    the subtotal is built from the unrounded item products, so the
    displayed line totals may not add up to it to the cent.
    """
    _validate_header(request)
    currency = CurrencyCode.of(request.currency_code)

    priced: list[PricedLineItem] = []
    items_sum = ZERO

    with exact_arithmetic():
        for index, item in enumerate(request.items):
            _validate_item(index, item)
            product = item.quantity * item.unit_price
            line_total = round2(product)
            priced.append(PricedLineItem.from_item(item, line_total))

            if mode is SummationMode.ROUNDED_ITEMS:
                items_sum += Decimal(line_total)
            else:
                items_sum += product

        labor_cost = request.labor_hours * request.labor_rate
        base = items_sum + labor_cost
        margin_amount = base * pct_to_ratio(request.margin_pct)
        subtotal = base + margin_amount
        tax_amount = subtotal * pct_to_ratio(request.tax_pct)
        total = subtotal + tax_amount

    return QuoteTotals(
        items=tuple(priced),
        subtotal=round2(subtotal),
        total=round2(total),
        currency_code=currency.value,
    )


# --- Validation ---------------------------------------------------------------


def _validate_header(request: QuoteRequest) -> None:
    if not request.items:
        raise EmptyItems()

    for pct in (request.margin_pct, request.tax_pct):
        if pct < ZERO or pct > HUNDRED:
            raise PercentageOutOfRange()


def _validate_item(index: int, item: LineItem) -> None:
    if not item.name or not item.name.strip():
        raise MissingItemName(index)
    if item.quantity < ZERO or item.unit_price < ZERO:
        raise NegativeAmount(index)
