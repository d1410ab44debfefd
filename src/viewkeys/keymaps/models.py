"""Dataclasses describing actions, views and key bindings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Literal, Sequence


class ViewId(IntEnum):
    """Addressable views; ``ALL`` is the wildcard consulted last."""

    ALL = 0
    MAIN = 1
    HISTORY = 2
    REF = 3
    COMMIT = 4
    DIFF = 5

    @classmethod
    def parse(cls, name: str) -> "ViewId":
        cleaned = name.strip().upper()
        try:
            return cls[cleaned]
        except KeyError as exc:
            raise ValueError(f"Unknown view '{name}'") from exc


ViewHierarchy = Sequence[ViewId]


@dataclass(frozen=True, slots=True)
class Action:
    """Symbolic application command produced by a resolved sequence."""

    name: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Action name cannot be empty")

    def __str__(self) -> str:
        return self.name


NO_ACTION = Action("<vk-nop>", "Do nothing")


class BindingKind(str, Enum):
    ACTION = "action"
    KEYSTRING = "keystring"


@dataclass(frozen=True, slots=True)
class Binding:
    """Either an action or a replacement key sequence."""

    kind: BindingKind
    action: Action = NO_ACTION
    keystring: str = ""

    @classmethod
    def for_action(cls, action: Action) -> "Binding":
        return cls(kind=BindingKind.ACTION, action=action)

    @classmethod
    def for_keystring(cls, keystring: str) -> "Binding":
        return cls(kind=BindingKind.KEYSTRING, keystring=keystring)

    @property
    def is_keystring(self) -> bool:
        return self.kind is BindingKind.KEYSTRING


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Verdict for one accumulated key sequence."""

    binding: Binding
    is_prefix: bool = False

    @property
    def action(self) -> Action:
        return self.binding.action

    @property
    def is_keystring(self) -> bool:
        return self.binding.is_keystring

    @property
    def status(self) -> Literal["match", "pending", "miss"]:
        if self.binding.is_keystring or self.binding.action != NO_ACTION:
            return "match"
        if self.is_prefix:
            return "pending"
        return "miss"


__all__ = [
    "Action",
    "Binding",
    "BindingKind",
    "NO_ACTION",
    "ResolutionResult",
    "ViewHierarchy",
    "ViewId",
]
