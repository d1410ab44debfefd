"""Built-in actions and the bindings that seed every view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from .models import Action, NO_ACTION, ViewId

if TYPE_CHECKING:  # pragma: no cover
    from .manager import KeyBindingManager

PROMPT_TEXT = ":"

EXIT = Action("<vk-exit>", "Exit the program")
PROMPT = Action("<vk-prompt>", "Open the command prompt")
NEXT_LINE = Action("<vk-next-line>", "Move selection down")
PREV_LINE = Action("<vk-prev-line>", "Move selection up")
SCROLL_RIGHT = Action("<vk-scroll-right>", "Scroll right")
SCROLL_LEFT = Action("<vk-scroll-left>", "Scroll left")
FIRST_LINE = Action("<vk-first-line>", "Jump to the first line")
LAST_LINE = Action("<vk-last-line>", "Jump to the last line")
SELECT = Action("<vk-select>", "Select the current line")
NEXT_VIEW = Action("<vk-next-view>", "Focus the next view")
PREV_VIEW = Action("<vk-prev-view>", "Focus the previous view")
FULL_SCREEN_VIEW = Action("<vk-full-screen-view>", "Toggle full screen view")

DEFAULT_ACTIONS: tuple[Action, ...] = (
    NO_ACTION,
    EXIT,
    PROMPT,
    NEXT_LINE,
    PREV_LINE,
    SCROLL_RIGHT,
    SCROLL_LEFT,
    FIRST_LINE,
    LAST_LINE,
    SELECT,
    NEXT_VIEW,
    PREV_VIEW,
    FULL_SCREEN_VIEW,
)


@dataclass(frozen=True, slots=True)
class DefaultKeys:
    """Factory key sequences for one action in one view."""

    action: Action
    view: ViewId
    sequences: tuple[str, ...]


DEFAULT_BINDINGS: tuple[DefaultKeys, ...] = (
    DefaultKeys(PROMPT, ViewId.MAIN, (PROMPT_TEXT,)),
    DefaultKeys(EXIT, ViewId.ALL, ("q",)),
    DefaultKeys(PREV_LINE, ViewId.ALL, ("<Up>", "k")),
    DefaultKeys(NEXT_LINE, ViewId.ALL, ("<Down>", "j")),
    DefaultKeys(SCROLL_RIGHT, ViewId.ALL, ("<Right>", "l")),
    DefaultKeys(SCROLL_LEFT, ViewId.ALL, ("<Left>", "h")),
    DefaultKeys(FIRST_LINE, ViewId.ALL, ("gg",)),
    DefaultKeys(LAST_LINE, ViewId.ALL, ("G",)),
    DefaultKeys(NEXT_VIEW, ViewId.ALL, ("<Tab>", "<C-w>w", "<C-w><C-w>")),
    DefaultKeys(PREV_VIEW, ViewId.ALL, ("<S-Tab>", "<C-w>W")),
    DefaultKeys(FULL_SCREEN_VIEW, ViewId.ALL, ("f", "<C-w>o", "<C-w><C-o>")),
    DefaultKeys(SELECT, ViewId.ALL, ("<Enter>",)),
)


@dataclass(frozen=True, slots=True)
class DefaultKeyTable:
    """Catalogue of actions plus factory bindings per view."""

    actions: tuple[Action, ...] = ()
    bindings: tuple[DefaultKeys, ...] = ()

    def keys_for(self, action: Action, view: ViewId) -> tuple[str, ...]:
        """Default sequences for ``action`` in ``view``, else its wildcard keys."""

        fallback: tuple[str, ...] = ()
        for entry in self.bindings:
            if entry.action != action:
                continue
            if entry.view == view:
                return entry.sequences
            if entry.view == ViewId.ALL:
                fallback = entry.sequences
        return fallback


DEFAULT_TABLE = DefaultKeyTable(actions=DEFAULT_ACTIONS, bindings=DEFAULT_BINDINGS)


def load_default_keymaps(
    manager: "KeyBindingManager",
    table: DefaultKeyTable = DEFAULT_TABLE,
    *,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
) -> None:
    """Register the table's actions and install its bindings.

    Every action name is first bound to its own action in the wildcard view,
    so keystring remaps can target ``<vk-next-line>`` and friends.
    """

    allowed = _build_filters(include_actions, exclude_actions)

    for action in table.actions:
        if not _selected(action.name, allowed):
            continue
        manager.actions.register(action, replace=True)
        manager.set_action_binding(ViewId.ALL, action.name, action)

    for entry in table.bindings:
        if not _selected(entry.action.name, allowed):
            continue
        for sequence in entry.sequences:
            manager.set_action_binding(entry.view, sequence, entry.action)


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "DEFAULT_TABLE",
    "DefaultKeyTable",
    "DefaultKeys",
    "PROMPT_TEXT",
    "load_default_keymaps",
]


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(name: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and name not in include:
        return False
    if name in exclude:
        return False
    return True
