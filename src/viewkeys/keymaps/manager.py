"""Key binding manager: per-view stores plus the resolution walk."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional

from viewkeys.runtime.telemetry import span

from .defaults import DEFAULT_TABLE, DefaultKeyTable, load_default_keymaps
from .models import Action, Binding, NO_ACTION, ResolutionResult, ViewHierarchy, ViewId
from .registry import ActionRegistry
from .store import BindingStore


@dataclass(slots=True)
class ManagerStats:
    """Lightweight snapshot describing manager state."""

    action_count: int
    binding_count: int
    views: tuple[ViewId, ...]


class KeyBindingManager:
    """Owns one ``BindingStore`` per view and resolves typed sequences.

    Resolution walks the caller's view hierarchy followed by ``ViewId.ALL``.
    The first scope holding the exact sequence wins; a scope that only holds
    longer sequences marks the result as a prefix but never stops the walk.
    """

    def __init__(
        self,
        defaults: Optional[DefaultKeyTable] = DEFAULT_TABLE,
        *,
        logger_name: str | None = None,
    ) -> None:
        self._stores: Dict[ViewId, BindingStore] = {}
        self._lock = threading.RLock()
        self._logger_name = logger_name
        self._revision = 0
        self._defaults = defaults or DefaultKeyTable()
        self.actions = ActionRegistry()
        if defaults is not None:
            with span(
                "keymaps::load_defaults",
                logger_name=logger_name,
                component="keymaps",
                metadata={"actions": len(defaults.actions)},
            ):
                load_default_keymaps(self, defaults)

    def revision(self) -> int:
        return self._revision

    def resolve(self, view_hierarchy: ViewHierarchy, sequence: str) -> ResolutionResult:
        scopes = (*view_hierarchy, ViewId.ALL)
        with self._lock, span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"scopes": len(scopes), "length": len(sequence)},
        ) as handle:
            is_prefix = False
            for view in scopes:
                store = self._stores.get(view)
                if store is None:
                    continue
                found = store.lookup(sequence)
                if found.exact and found.binding is not None:
                    handle.add_metadata("status", "match")
                    handle.add_metadata("view", getattr(view, "name", view))
                    return ResolutionResult(found.binding, is_prefix=found.has_longer)
                if found.has_longer:
                    is_prefix = True

            handle.add_metadata("status", "pending" if is_prefix else "miss")
            return ResolutionResult(Binding.for_action(NO_ACTION), is_prefix=is_prefix)

    def set_action_binding(self, view: ViewId, sequence: str, action: Action) -> None:
        self._install(view, sequence, Binding.for_action(action))

    def set_keystring_binding(self, view: ViewId, sequence: str, keystring: str) -> None:
        self._install(view, sequence, Binding.for_keystring(keystring))

    def set_action_binding_by_name(self, view: ViewId, sequence: str, name: str) -> Action:
        """Bind ``sequence`` to a registered action; raises ``UnknownActionError``."""

        action = self.actions.get(name)
        self.set_action_binding(view, sequence, action)
        return action

    def default_keys(self, action: Action, view: ViewId) -> tuple[str, ...]:
        return self._defaults.keys_for(action, view)

    def bindings(self, view: ViewId) -> list[tuple[str, Binding]]:
        with self._lock:
            store = self._stores.get(view)
            return store.items() if store else []

    def stats(self) -> ManagerStats:
        with self._lock:
            return ManagerStats(
                action_count=len(self.actions),
                binding_count=sum(len(store) for store in self._stores.values()),
                views=tuple(sorted(self._stores)),
            )

    def _install(self, view: ViewId, sequence: str, binding: Binding) -> None:
        with self._lock, span(
            "keymaps::set_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"view": getattr(view, "name", view), "kind": binding.kind.value},
        ):
            store = self._stores.get(view)
            if store is None:
                store = BindingStore()
            store.insert(sequence, binding)
            self._stores[view] = store
            self._revision += 1


__all__ = ["KeyBindingManager", "ManagerStats"]
