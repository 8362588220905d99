"""Read a proposed quote from a JSON document.

The document has the shape of a create-quote request body::

    {"items": [{"kind": "material", "name": "Tile", "qty": 2,
                "unit": "box", "unit_price": 10.00}],
     "labor_hours": 1, "labor_rate": 5, "margin_pct": 10,
     "tax_pct": 8, "currency": "usd", "notes": null}

JSON numbers, integers included, are decoded straight to ``Decimal`` so
no binary float and no int conversion ever touches an amount.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from quoting.application.dto import QuoteItemSpec, QuoteSpec
from quoting.domain.exceptions import QuoteFileError
from quoting.domain.model.value_objects import to_exact

_NUMERIC_FIELDS = ("labor_hours", "labor_rate", "margin_pct", "tax_pct")


def load_quote_spec(path: Path) -> QuoteSpec:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuoteFileError(f"Cannot read quote file '{path}': {exc.strerror}") from exc
    except UnicodeDecodeError as exc:
        raise QuoteFileError(f"Quote file '{path}' is not valid UTF-8") from exc
    return parse_quote_spec(text)


def parse_quote_spec(text: str) -> QuoteSpec:
    try:
        raw = json.loads(text, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as exc:
        raise QuoteFileError(f"Invalid JSON: {exc.msg} (line {exc.lineno})") from exc
    except ValueError as exc:
        raise QuoteFileError(f"Invalid JSON: {exc}") from exc
    return quote_spec_from_dict(raw)


def quote_spec_from_dict(raw: Any) -> QuoteSpec:
    if not isinstance(raw, dict):
        raise QuoteFileError("Quote document must be a JSON object")

    raw_items = raw.get("items", [])
    if not isinstance(raw_items, list):
        raise QuoteFileError("items must be a list")

    items = [_to_item_spec(i, entry) for i, entry in enumerate(raw_items)]
    numbers = {name: _number(raw.get(name, 0), name) for name in _NUMERIC_FIELDS}

    notes = raw.get("notes")
    return QuoteSpec(
        items=items,
        currency=_text(raw.get("currency"), "currency"),
        notes=None if notes is None else str(notes),
        **numbers,
    )


# --- Field helpers ------------------------------------------------------------


def _to_item_spec(index: int, entry: Any) -> QuoteItemSpec:
    if not isinstance(entry, dict):
        raise QuoteFileError(f"items[{index}] must be an object")
    return QuoteItemSpec(
        kind=_text(entry.get("kind"), f"items[{index}].kind"),
        name=_text(entry.get("name"), f"items[{index}].name"),
        qty=_number(entry.get("qty", 0), f"items[{index}].qty"),
        unit=_text(entry.get("unit"), f"items[{index}].unit"),
        unit_price=_number(entry.get("unit_price", 0), f"items[{index}].unit_price"),
    )


def _number(value: Any, field: str) -> Decimal:
    try:
        return to_exact(value)
    except (TypeError, ValueError) as exc:
        raise QuoteFileError(f"{field} must be a number, got {value!r}") from exc


def _text(value: Any, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise QuoteFileError(f"{field} must be a string, got {value!r}")
    return value
