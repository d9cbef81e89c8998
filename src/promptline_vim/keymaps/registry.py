"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, Iterator, Optional

from promptline_vim.runtime.telemetry import span

from .models import ActionRef, Binding, KeySequence


class KeymapConflictError(RuntimeError):
    """Raised when a binding reuses a key signature already bound in its mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the per-mode binding index."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[str, Dict[str, set[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if not replace and action.id in self._actions:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._drop(conflict)
                existing = self._bindings.get(binding.id)
                if existing is not None:
                    self._drop(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for bucket in self._mode_index.get(mode, {}).values():
            for binding_id in sorted(bucket):
                yield self._bindings[binding_id]

    def override_sequence_timeouts(
        self, *, timeout_ms: int, mode: Optional[str] = None
    ) -> None:
        """Re-time every multi-stroke binding (optionally only in ``mode``)."""

        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        targets = [b for b in self.iter_bindings(mode) if len(b.sequence.strokes) > 1]
        for binding in targets:
            sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
            self._bindings[binding.id] = replace(binding, sequence=sequence)
        if targets:
            self._revision += 1

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        matches = self._mode_index.get(binding.mode, {}).get(binding.key_signature, ())
        return [self._bindings[match_id] for match_id in sorted(matches)]

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        by_signature.setdefault(binding.key_signature, set()).add(binding.id)

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        signatures = mode_bucket.get(binding.key_signature)
        if signatures is None:
            return
        signatures.discard(binding.id)
        if not signatures:
            mode_bucket.pop(binding.key_signature, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


__all__ = ["KeymapConflictError", "KeymapRegistry"]
