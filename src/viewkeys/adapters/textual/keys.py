"""Translate Textual key names into engine key tokens."""

from __future__ import annotations

import re
from typing import Optional

_NAMED_KEYS = {
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "tab": "Tab",
    "enter": "Enter",
    "escape": "Esc",
    "backspace": "BS",
    "delete": "Del",
    "insert": "Insert",
    "space": "Space",
}

_MODIFIERS = {"ctrl": "C", "shift": "S", "alt": "A", "meta": "M"}

_FUNCTION_KEY = re.compile(r"f\d{1,2}")


def textual_key_to_token(key: str, character: Optional[str] = None) -> Optional[str]:
    """Return the engine token for a Textual key, or ``None`` to ignore it.

    ``"j"`` -> ``"j"``, ``"up"`` -> ``"<Up>"``, ``"ctrl+w"`` -> ``"<C-w>"``,
    ``"shift+tab"`` -> ``"<S-Tab>"``.
    """

    chorded = key.startswith(("ctrl+", "alt+", "meta+"))
    if character and len(character) == 1 and character.isprintable() and not chorded:
        return character

    *modifiers, base = key.split("+")
    if not base or any(mod not in _MODIFIERS for mod in modifiers):
        return None

    if base in _NAMED_KEYS:
        name = _NAMED_KEYS[base]
    elif _FUNCTION_KEY.fullmatch(base):
        name = base.upper()
    elif len(base) == 1:
        if not modifiers:
            return base
        name = base
    else:
        return None

    prefix = "".join(f"{_MODIFIERS[mod]}-" for mod in modifiers)
    return f"<{prefix}{name}>"


__all__ = ["textual_key_to_token"]
