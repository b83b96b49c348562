from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from os import getenv

from dotenv import load_dotenv

DEFAULT_REIGN_EFFECTIVE_START = date(2025, 5, 1)
DEFAULT_FIRST_MONTH_END = date(2025, 5, 31)
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get_env_date(name: str, default: date) -> date:
    raw = getenv(name, "").strip()
    if not raw:
        return default
    try:
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise ValueError(f"{name} must be an ISO date (YYYY-MM-DD), got {raw!r}") from exc


@dataclass(slots=True)
class Settings:
    reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START
    first_month_end: date = DEFAULT_FIRST_MONTH_END
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        reign_start = _get_env_date("RINGSCORE_REIGN_EFFECTIVE_START", DEFAULT_REIGN_EFFECTIVE_START)
        first_month_end = _get_env_date("RINGSCORE_FIRST_MONTH_END", DEFAULT_FIRST_MONTH_END)
        if first_month_end < reign_start:
            raise ValueError("RINGSCORE_FIRST_MONTH_END must not precede RINGSCORE_REIGN_EFFECTIVE_START")

        level = getenv("RINGSCORE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown RINGSCORE_LOG_LEVEL: {level}")

        return cls(
            reign_effective_start=reign_start,
            first_month_end=first_month_end,
            log_level=level,
        )


def load_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
