from __future__ import annotations

import allure
import pytest

from prun.config import Settings

pytestmark = [
    allure.epic("Fan-out Run"),
    allure.feature("Configuration"),
]


def test_from_env_defaults() -> None:
    settings = Settings.from_env(4)

    assert settings.workers == 4
    assert settings.placeholder == "{}"
    assert settings.queue_size == 1
    assert settings.announce is True
    assert settings.log_level == "WARNING"
    settings.validate()


def test_from_env_reads_prun_variables(monkeypatch) -> None:
    monkeypatch.setenv("PRUN_PLACEHOLDER", "@@")
    monkeypatch.setenv("PRUN_QUEUE_SIZE", "0")
    monkeypatch.setenv("PRUN_CHUNK_SIZE", "1")
    monkeypatch.setenv("PRUN_QUIET", "yes")
    monkeypatch.setenv("PRUN_LOG_LEVEL", "debug")

    settings = Settings.from_env(2)

    assert settings.placeholder == "@@"
    assert settings.queue_size == 0
    assert settings.chunk_size == 1
    assert settings.announce is False
    assert settings.log_level == "DEBUG"


def test_explicit_arguments_override_environment(monkeypatch) -> None:
    monkeypatch.setenv("PRUN_PLACEHOLDER", "@@")
    monkeypatch.setenv("PRUN_QUEUE_SIZE", "8")

    settings = Settings.from_env(2, placeholder="%", queue_size=3, quiet=True)

    assert settings.placeholder == "%"
    assert settings.queue_size == 3
    assert settings.announce is False


def test_from_env_rejects_invalid_boolean(monkeypatch) -> None:
    monkeypatch.setenv("PRUN_QUIET", "maybe")

    with pytest.raises(ValueError, match="Invalid boolean value for PRUN_QUIET"):
        Settings.from_env(1)


def test_from_env_rejects_invalid_integer(monkeypatch) -> None:
    monkeypatch.setenv("PRUN_QUEUE_SIZE", "many")

    with pytest.raises(ValueError, match="Invalid integer value for PRUN_QUEUE_SIZE"):
        Settings.from_env(1)


@pytest.mark.parametrize(
    ("settings", "message"),
    [
        (Settings(workers=0), "Worker count must be >= 1"),
        (Settings(placeholder=""), "PRUN_PLACEHOLDER"),
        (Settings(queue_size=-1), "PRUN_QUEUE_SIZE"),
        (Settings(chunk_size=0), "PRUN_CHUNK_SIZE"),
        (Settings(log_level="LOUD"), "Invalid log level"),
    ],
)
def test_validate_rejects_out_of_range_settings(settings: Settings, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        settings.validate()
