"""The single implicit yank register."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

RegisterType = Literal["character", "line"]


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    type: RegisterType = "character"

    @property
    def linewise(self) -> bool:
        return self.type == "line"


class YankRegister:
    """Holds the most recently yanked or deleted text.

    Every write overwrites the slot; it is never cleared implicitly and starts
    out as an empty characterwise value.
    """

    def __init__(self) -> None:
        self._value = RegisterValue(text="")

    @property
    def value(self) -> RegisterValue:
        return self._value

    @property
    def text(self) -> str:
        return self._value.text

    def yank(self, text: str, *, register_type: RegisterType = "character") -> RegisterValue:
        self._value = RegisterValue(text=text, type=register_type)
        return self._value

    def resolve(self, clipboard: Optional[str]) -> RegisterValue:
        """Pick what a put should insert given the clipboard contents.

        Non-empty clipboard text wins; when it is our own last yank (mirrored
        out through the yank hook) the register's line/character type is kept.
        """

        if not clipboard:
            return self._value
        if clipboard == self._value.text:
            return self._value
        return RegisterValue(text=clipboard)


__all__ = ["RegisterType", "RegisterValue", "YankRegister"]
