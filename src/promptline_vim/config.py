"""Engine settings from code, the environment, or the app's settings file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from promptline_vim.keymaps import DEFAULT_SEQUENCE_TIMEOUT_MS
from promptline_vim.runtime.telemetry import PRESETS, env

DEFAULT_UNDO_CAPACITY = 100

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineSettings:
    """Knobs for a ``VimModeEngine``.

    ``enabled`` is the user's vim toggle; ``log_preset`` names a telemetry
    preset the embedding application should apply at startup.
    """

    enabled: bool = False
    pending_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    undo_capacity: int = DEFAULT_UNDO_CAPACITY
    log_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if self.pending_timeout_ms <= 0:
            raise ValueError("pending_timeout_ms must be positive")
        if self.undo_capacity <= 0:
            raise ValueError("undo_capacity must be positive")
        if self.log_preset is not None and self.log_preset not in PRESETS:
            raise ValueError(
                f"Unknown log preset '{self.log_preset}'; expected one of {', '.join(PRESETS)}"
            )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Read ``PROMPTLINE_VIM_ENABLED``, ``_PENDING_TIMEOUT_MS``,
        ``_UNDO_CAPACITY`` and ``_LOG_PRESET``; unset variables keep defaults."""

        defaults = cls()
        return cls(
            enabled=_parse_bool("ENABLED", env("ENABLED"), defaults.enabled),
            pending_timeout_ms=_parse_int(
                "PENDING_TIMEOUT_MS", env("PENDING_TIMEOUT_MS"), defaults.pending_timeout_ms
            ),
            undo_capacity=_parse_int(
                "UNDO_CAPACITY", env("UNDO_CAPACITY"), defaults.undo_capacity
            ),
            log_preset=(env("LOG_PRESET") or "").strip().lower() or None,
        )

    @classmethod
    def from_user_settings(
        cls, settings: Optional[Mapping[str, Any]], *, base: Optional["EngineSettings"] = None
    ) -> "EngineSettings":
        """Apply the ``{"vim": {"enabled": bool}}`` block of the app settings."""

        base = base or cls()
        vim = (settings or {}).get("vim")
        if vim is None:
            return base
        if not isinstance(vim, Mapping):
            raise ValueError("'vim' settings must be a mapping")
        enabled = vim.get("enabled", base.enabled)
        if not isinstance(enabled, bool):
            raise ValueError("'vim.enabled' must be a boolean")
        return cls(
            enabled=enabled,
            pending_timeout_ms=base.pending_timeout_ms,
            undo_capacity=base.undo_capacity,
            log_preset=base.log_preset,
        )


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"PROMPTLINE_VIM_{name} must be a boolean, got '{raw}'")


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"PROMPTLINE_VIM_{name} must be an integer, got '{raw}'") from None


__all__ = ["DEFAULT_UNDO_CAPACITY", "EngineSettings"]
