"""Exceptions raised by the quoting domain.

Everything derives from DomainException, which the CLI turns into a
one-line error.  ``code`` is a stable identifier a transport layer can
map to its own status without parsing messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "domain_error"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "validation_error"


# --- Quote validation (closed set) --------------------------------------------


class QuoteValidationError(ValidationError):
    """Caller input that the pricing engine refuses to price.

    Never transient: the same input always produces the same error.
    """

    index: int | None = None


class EmptyItems(QuoteValidationError):
    """No line items were supplied."""

    def __init__(self) -> None:
        super().__init__("items: at least one item is required")


class PercentageOutOfRange(QuoteValidationError):
    """Margin or tax percentage outside 0..100."""

    def __init__(self) -> None:
        super().__init__("margin_pct and tax_pct must be between 0 and 100")


class InvalidCurrency(QuoteValidationError):
    """Currency code is not exactly three letters."""

    def __init__(self, currency_code: str) -> None:
        super().__init__("currency must be a valid 3-letter ISO code")
        self.currency_code = currency_code


class MissingItemName(QuoteValidationError):
    """Item at ``index`` has an empty or blank name."""

    def __init__(self, index: int) -> None:
        super().__init__(f"items[{index}].name is required")
        self.index = index


class NegativeAmount(QuoteValidationError):
    """Item at ``index`` has a negative quantity or unit price."""

    def __init__(self, index: int) -> None:
        super().__init__(f"items[{index}] qty/unit_price must be >= 0")
        self.index = index


class QuoteFileError(DomainException):
    """A quote request file could not be read or decoded."""

    code = "bad_json"
