"""Apply user-defined bindings handed over by a configuration loader."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from viewkeys.runtime.telemetry import record_event, span

from .manager import KeyBindingManager
from .models import BindingKind, ViewId
from .registry import UnknownActionError


@dataclass(frozen=True, slots=True)
class ConfigBinding:
    """One ``map`` entry: bind ``sequence`` in ``view`` to an action name or keys."""

    view: ViewId | str
    sequence: str
    target: str
    kind: BindingKind | str = BindingKind.ACTION


@dataclass(frozen=True, slots=True)
class ConfigRejection:
    entry: ConfigBinding
    reason: str


@dataclass(frozen=True, slots=True)
class ConfigReport:
    applied: tuple[ConfigBinding, ...] = ()
    rejected: tuple[ConfigRejection, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.rejected


def apply_config_bindings(
    manager: KeyBindingManager,
    entries: Iterable[ConfigBinding],
    *,
    logger_name: str | None = None,
) -> ConfigReport:
    """Install each entry in order; invalid entries are rejected, not applied.

    A rejected entry leaves whatever was bound before in place.
    """

    applied: list[ConfigBinding] = []
    rejected: list[ConfigRejection] = []

    with span(
        "keymaps::apply_config",
        logger_name=logger_name,
        component="keymaps",
    ) as handle:
        for entry in entries:
            try:
                _apply_entry(manager, entry)
            except (UnknownActionError, ValueError) as exc:
                rejected.append(ConfigRejection(entry, str(exc)))
            else:
                applied.append(entry)

        handle.add_metadata("applied", len(applied))
        handle.add_metadata("rejected", len(rejected))

    for rejection in rejected:
        record_event(
            "config.rejected",
            level="warning",
            data={
                "view": getattr(rejection.entry.view, "name", rejection.entry.view),
                "sequence": rejection.entry.sequence,
                "reason": rejection.reason,
            },
            logger_name=logger_name,
        )

    return ConfigReport(applied=tuple(applied), rejected=tuple(rejected))


def _apply_entry(manager: KeyBindingManager, entry: ConfigBinding) -> None:
    view = entry.view if isinstance(entry.view, ViewId) else ViewId.parse(entry.view)
    kind = BindingKind(entry.kind)
    if kind is BindingKind.KEYSTRING:
        if not entry.target:
            raise ValueError("replacement keys must be a non-empty string")
        manager.set_keystring_binding(view, entry.sequence, entry.target)
    else:
        manager.set_action_binding_by_name(view, entry.sequence, entry.target)


__all__ = [
    "ConfigBinding",
    "ConfigRejection",
    "ConfigReport",
    "apply_config_bindings",
]
