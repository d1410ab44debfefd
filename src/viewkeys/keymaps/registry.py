"""Registry of symbolic action names."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator

from .models import Action, NO_ACTION


class UnknownActionError(KeyError):
    """Raised when a symbolic action name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Action '{self.name}' is not registered"


class ActionRegistry:
    """Maps symbolic names (``<vk-exit>``) to ``Action`` values."""

    def __init__(self, actions: Iterable[Action] = ()) -> None:
        self._actions: Dict[str, Action] = {NO_ACTION.name: NO_ACTION}
        for action in actions:
            self.register(action, replace=True)

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def register(self, action: Action, *, replace: bool = False) -> Action:
        if not replace and action.name in self._actions:
            raise ValueError(f"Action '{action.name}' already registered")
        self._actions[action.name] = action
        return action

    def get(self, name: str) -> Action:
        try:
            return self._actions[name]
        except KeyError:
            raise UnknownActionError(name) from None

    def is_valid(self, name: str) -> bool:
        return name in self._actions

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._actions))


__all__ = ["ActionRegistry", "UnknownActionError"]
