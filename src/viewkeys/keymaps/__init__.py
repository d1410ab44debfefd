"""View-scoped key bindings, default keymaps and sequence resolution."""

from .models import (
    Action,
    Binding,
    BindingKind,
    NO_ACTION,
    ResolutionResult,
    ViewHierarchy,
    ViewId,
)
from .store import BindingStore, StoreLookup
from .registry import ActionRegistry, UnknownActionError
from .defaults import DEFAULT_TABLE, DefaultKeyTable, DefaultKeys, load_default_keymaps
from .manager import KeyBindingManager, ManagerStats
from .config import ConfigBinding, ConfigRejection, ConfigReport, apply_config_bindings

__all__ = [
    "Action",
    "ActionRegistry",
    "Binding",
    "BindingKind",
    "BindingStore",
    "ConfigBinding",
    "ConfigRejection",
    "ConfigReport",
    "DEFAULT_TABLE",
    "DefaultKeyTable",
    "DefaultKeys",
    "KeyBindingManager",
    "ManagerStats",
    "NO_ACTION",
    "ResolutionResult",
    "StoreLookup",
    "UnknownActionError",
    "ViewHierarchy",
    "ViewId",
    "apply_config_bindings",
    "load_default_keymaps",
]
