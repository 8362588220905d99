"""Runtime settings read from the environment.

Unknown or malformed values fall back to the defaults rather than
failing, so a typo in the environment never blocks pricing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from quoting.domain.model.quote import SummationMode

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    summation_mode: SummationMode = SummationMode.EXACT
    log_level: str = "WARNING"

    @classmethod
    def load(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``QUOTING_*`` environment variables."""
        env = os.environ if environ is None else environ

        raw_mode = env.get("QUOTING_SUMMATION_MODE", "").strip().lower()
        try:
            mode = SummationMode(raw_mode) if raw_mode else cls.summation_mode
        except ValueError:
            mode = cls.summation_mode

        level = env.get("QUOTING_LOG_LEVEL", "").strip().upper()
        if level not in _LOG_LEVELS:
            level = cls.log_level

        return cls(summation_mode=mode, log_level=level)
