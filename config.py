"""
Panel settings read from the environment once per process.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DATA_PATH = os.path.join("data", "companies.csv")
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class PanelSettings:
    data_path: str
    delimiter: str
    log_level: str
    correlation_digits: int


def _read_delimiter() -> str:
    raw = os.getenv("ESG_PANEL_DELIMITER", ",")
    if len(raw) != 1:
        raise ValueError(
            f"ESG_PANEL_DELIMITER must be a single character, got {raw!r}."
        )
    return raw


def _read_log_level() -> str:
    level = os.getenv("ESG_PANEL_LOG_LEVEL", "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"ESG_PANEL_LOG_LEVEL '{level}' is not valid. "
            f"Allowed values: {sorted(_LOG_LEVELS)}."
        )
    return level


def _read_digits() -> int:
    raw = os.getenv("ESG_PANEL_CORRELATION_DIGITS", "2").strip()
    try:
        digits = int(raw)
    except ValueError as exc:
        raise ValueError(f"ESG_PANEL_CORRELATION_DIGITS must be an integer, got {raw!r}.") from exc
    if digits < 0:
        raise ValueError("ESG_PANEL_CORRELATION_DIGITS must not be negative.")
    return digits


def load_settings() -> PanelSettings:
    return PanelSettings(
        data_path=os.getenv("ESG_PANEL_DATA_PATH", DEFAULT_DATA_PATH).strip() or DEFAULT_DATA_PATH,
        delimiter=_read_delimiter(),
        log_level=_read_log_level(),
        correlation_digits=_read_digits(),
    )


@lru_cache(maxsize=1)
def get_settings() -> PanelSettings:
    return load_settings()


def configure_logging(settings: PanelSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
