# slotfinder/config.py
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"


@dataclass
class AppSettings:
    log_level: str = "INFO"
    metrics_port: int = 8000
    default_duration: int = 30       # minutes
    calendar_day: date = field(default_factory=date.today)  # anchors the day view


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _date_env(name: str) -> Optional[date]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an ISO date (YYYY-MM-DD), got {raw!r}") from None


def load_settings(dotenv_path: Optional[Path] = None) -> AppSettings:
    """Read settings from the environment, after loading a .env file if present."""
    load_dotenv(dotenv_path=dotenv_path or env_path)

    settings = AppSettings(
        log_level=os.getenv("SLOTFINDER_LOG_LEVEL", "INFO").upper(),
        metrics_port=_int_env("SLOTFINDER_METRICS_PORT", 8000),
        default_duration=_int_env("SLOTFINDER_DEFAULT_DURATION", 30),
    )
    day = _date_env("SLOTFINDER_CALENDAR_DAY")
    if day is not None:
        settings.calendar_day = day

    if settings.default_duration < 0:
        raise ConfigError("SLOTFINDER_DEFAULT_DURATION must be >= 0")
    if not isinstance(logging.getLevelName(settings.log_level), int):
        raise ConfigError(f"SLOTFINDER_LOG_LEVEL is not a logging level: {settings.log_level!r}")
    return settings


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=logging.getLevelName(settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
