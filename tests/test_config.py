from datetime import date

import pytest

from ringscore.config import DEFAULT_FIRST_MONTH_END, DEFAULT_REIGN_EFFECTIVE_START, Settings
from ringscore.engine import ScoringEngine

ENV_VARS = ("RINGSCORE_REIGN_EFFECTIVE_START", "RINGSCORE_FIRST_MONTH_END", "RINGSCORE_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    settings = Settings.from_env()

    assert settings.reign_effective_start == DEFAULT_REIGN_EFFECTIVE_START
    assert settings.first_month_end == DEFAULT_FIRST_MONTH_END
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("RINGSCORE_REIGN_EFFECTIVE_START", "2026-01-01")
    monkeypatch.setenv("RINGSCORE_FIRST_MONTH_END", "2026-01-31")
    monkeypatch.setenv("RINGSCORE_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.reign_effective_start == date(2026, 1, 1)
    assert settings.first_month_end == date(2026, 1, 31)
    assert settings.log_level == "DEBUG"


def test_bad_date_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("RINGSCORE_FIRST_MONTH_END", "end of may")
    with pytest.raises(ValueError, match="RINGSCORE_FIRST_MONTH_END must be an ISO date"):
        Settings.from_env()


def test_first_month_end_before_start_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("RINGSCORE_REIGN_EFFECTIVE_START", "2025-07-01")
    with pytest.raises(ValueError, match="must not precede"):
        Settings.from_env()


def test_unknown_log_level_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("RINGSCORE_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="Unknown RINGSCORE_LOG_LEVEL"):
        Settings.from_env()


def test_engine_from_env_uses_environment(monkeypatch) -> None:
    monkeypatch.setenv("RINGSCORE_REIGN_EFFECTIVE_START", "2025-09-01")
    monkeypatch.setenv("RINGSCORE_FIRST_MONTH_END", "2025-09-30")

    engine = ScoringEngine.from_env()

    assert engine.settings.reign_effective_start == date(2025, 9, 1)
    assert engine.settings.first_month_end == date(2025, 9, 30)
