import logging
from datetime import date

import pytest

from slotfinder import ConfigError
from slotfinder.config import AppSettings, configure_logging, load_settings

ENV_VARS = [
    "SLOTFINDER_LOG_LEVEL",
    "SLOTFINDER_METRICS_PORT",
    "SLOTFINDER_DEFAULT_DURATION",
    "SLOTFINDER_CALENDAR_DAY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path / ".env"  # does not exist


def test_defaults(clean_env):
    settings = load_settings(clean_env)
    assert settings.log_level == "INFO"
    assert settings.metrics_port == 8000
    assert settings.default_duration == 30
    assert settings.calendar_day == date.today()


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("SLOTFINDER_LOG_LEVEL", "debug")
    monkeypatch.setenv("SLOTFINDER_METRICS_PORT", "9100")
    monkeypatch.setenv("SLOTFINDER_DEFAULT_DURATION", "45")
    monkeypatch.setenv("SLOTFINDER_CALENDAR_DAY", "2026-03-02")

    settings = load_settings(clean_env)
    assert settings == AppSettings(
        log_level="DEBUG",
        metrics_port=9100,
        default_duration=45,
        calendar_day=date(2026, 3, 2),
    )


def test_dotenv_file_is_read(clean_env, monkeypatch):
    clean_env.write_text("SLOTFINDER_DEFAULT_DURATION=60\n")
    # load_dotenv writes into os.environ; let monkeypatch undo it
    monkeypatch.setenv("SLOTFINDER_DEFAULT_DURATION", "")
    monkeypatch.delenv("SLOTFINDER_DEFAULT_DURATION")

    assert load_settings(clean_env).default_duration == 60


@pytest.mark.parametrize("name,value", [
    ("SLOTFINDER_METRICS_PORT", "eighty"),
    ("SLOTFINDER_DEFAULT_DURATION", "-5"),
    ("SLOTFINDER_CALENDAR_DAY", "next monday"),
    ("SLOTFINDER_LOG_LEVEL", "BASIC_FORMAT"),
    ("SLOTFINDER_LOG_LEVEL", "chatty"),
])
def test_invalid_values(clean_env, monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        load_settings(clean_env)


def test_configure_logging_uses_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging(AppSettings(log_level="WARNING"))
    assert calls["level"] == logging.WARNING
