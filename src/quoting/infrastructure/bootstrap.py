"""Composition root: builds application handlers from the settings."""

from __future__ import annotations

from quoting.application.price_quote import PriceQuoteHandler
from quoting.domain.model.quote import SummationMode
from quoting.infrastructure.settings import Settings


def settings() -> Settings:
    return Settings.load()


def price_quote_handler(mode: SummationMode | None = None) -> PriceQuoteHandler:
    """Handler using *mode*, or the configured summation mode if None."""
    return PriceQuoteHandler(mode=mode or settings().summation_mode)
