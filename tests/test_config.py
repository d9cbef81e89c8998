from __future__ import annotations

import pytest

from promptline_vim.config import EngineSettings


def test_defaults() -> None:
    settings = EngineSettings()

    assert settings.enabled is False
    assert settings.pending_timeout_ms == 1000
    assert settings.undo_capacity == 100
    assert settings.log_preset is None


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTLINE_VIM_ENABLED", "yes")
    monkeypatch.setenv("PROMPTLINE_VIM_PENDING_TIMEOUT_MS", "750")
    monkeypatch.setenv("PROMPTLINE_VIM_UNDO_CAPACITY", "20")
    monkeypatch.setenv("PROMPTLINE_VIM_LOG_PRESET", "Quiet")

    settings = EngineSettings.from_env()

    assert settings == EngineSettings(
        enabled=True, pending_timeout_ms=750, undo_capacity=20, log_preset="quiet"
    )


def test_from_env_ignores_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROMPTLINE_VIM_ENABLED", "")
    monkeypatch.delenv("PROMPTLINE_VIM_UNDO_CAPACITY", raising=False)

    assert EngineSettings.from_env().undo_capacity == 100


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ENABLED", "maybe"),
        ("PENDING_TIMEOUT_MS", "soon"),
        ("PENDING_TIMEOUT_MS", "0"),
        ("UNDO_CAPACITY", "-1"),
        ("LOG_PRESET", "loud"),
    ],
)
def test_from_env_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(f"PROMPTLINE_VIM_{name}", value)

    with pytest.raises(ValueError):
        EngineSettings.from_env()


def test_from_user_settings_reads_vim_block() -> None:
    base = EngineSettings(undo_capacity=5)

    settings = EngineSettings.from_user_settings({"vim": {"enabled": True}}, base=base)

    assert settings.enabled is True
    assert settings.undo_capacity == 5


def test_from_user_settings_missing_block_keeps_base() -> None:
    assert EngineSettings.from_user_settings({"theme": "dark"}) == EngineSettings()
    assert EngineSettings.from_user_settings(None) == EngineSettings()


@pytest.mark.parametrize("payload", [{"vim": "on"}, {"vim": {"enabled": "true"}}])
def test_from_user_settings_rejects_bad_types(payload: dict) -> None:
    with pytest.raises(ValueError):
        EngineSettings.from_user_settings(payload)
