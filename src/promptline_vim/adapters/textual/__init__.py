"""Textual integration: a ``TextArea`` host, key translation, and a demo app."""

from .controller import TextualUIHooks, TextualVimController, translate_key
from .host import TextAreaHost, location_for_offset, offset_for_location

__all__ = [
    "TextAreaHost",
    "TextualUIHooks",
    "TextualVimController",
    "location_for_offset",
    "offset_for_location",
    "translate_key",
]
