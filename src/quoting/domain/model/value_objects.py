"""Value Objects and money helpers shared across the domain.

Every monetary value is a ``Decimal`` computed inside an exact context:
precision is unbounded for all practical purposes and the ``Inexact``
signal is trapped, so any operation that would have to round raises
instead of silently losing cents.  Only ``round2`` turns a value into
display precision.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_FLOOR,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    localcontext,
)
from typing import Iterator, Union

from quoting.domain.exceptions import InvalidCurrency

Number = Union[int, str, float, Decimal]

ZERO = Decimal(0)
HUNDRED = Decimal(100)
HALF = Decimal("0.5")

_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[Inexact, InvalidOperation])
_CURRENCY_RE = re.compile(r"[A-Za-z]{3}")


@contextmanager
def exact_arithmetic() -> Iterator[None]:
    """Run the enclosed block with a non-rounding decimal context.

    ``localcontext`` is thread- and task-local, so concurrent callers
    never see each other's context.
    """
    with localcontext(_EXACT):
        yield


def to_exact(value: Number) -> Decimal:
    """Coerce a caller-supplied number to an exact ``Decimal``.

    Floats go through their shortest repr so ``0.1`` means one tenth,
    not the nearest binary fraction.
    """
    if isinstance(value, bool):
        raise TypeError("Expected a number, got bool")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(value)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid number: {value!r}") from exc
    else:
        raise TypeError(f"Expected a number, got {type(value).__name__}")

    if not amount.is_finite():
        raise ValueError(f"Number must be finite, got {value!r}")
    return amount


def pct_to_ratio(pct: Decimal) -> Decimal:
    """25.5 -> 0.255, as an exponent shift so it can never round."""
    with exact_arithmetic():
        return pct.scaleb(-2)


def round2(value: Decimal) -> str:
    """Round half-up to cents and render as ``"<int>.<2 digits>"``.

    Computes ``floor(value * 100 + 1/2)`` and inserts the decimal point
    two digits from the right: 5 -> "0.05", 45 -> "0.45", 1234 -> "12.34".
    """
    with exact_arithmetic():
        cents = (value * HUNDRED + HALF).to_integral_value(rounding=ROUND_FLOOR)
        if cents.is_zero():
            cents = ZERO
        # stays a Decimal: no int/str round trip, so no digit limit
        return f"{cents.scaleb(-2):.2f}"


@dataclass(frozen=True)
class CurrencyCode:
    """A three-letter currency code, always upper case."""

    value: str

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def of(raw: str) -> CurrencyCode:
        if not isinstance(raw, str) or not _CURRENCY_RE.fullmatch(raw):
            raise InvalidCurrency(raw)
        return CurrencyCode(raw.upper())
