"""Textual-facing adapter that feeds key tokens and dispatches actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from viewkeys.dispatch import InputResult, KeySequenceProcessor
from viewkeys.keymaps import Action

from .keys import textual_key_to_token


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    dispatch_action: Callable[[Action], None]
    update_status: Callable[[str], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualKeyAdapter:
    """Bridges Textual key events to a ``KeySequenceProcessor``."""

    def __init__(self, processor: KeySequenceProcessor, hooks: TextualUIHooks) -> None:
        self.processor = processor
        self.hooks = hooks

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> Optional[InputResult]:
        token = textual_key_to_token(key, character)
        if token is None:
            self._log("ignored", key=key)
            return None
        self._log("key ->", key=key, token=token)
        result = self.processor.feed(token)
        self._after_result(result)
        return result

    def process_timeouts(self) -> Optional[InputResult]:
        result = self.processor.process_timeouts()
        if result is not None:
            self._log("timeout ->", sequence=result.sequence)
            self._after_result(result)
        return result

    def _after_result(self, result: InputResult) -> None:
        self._log(
            "result <-",
            status=result.status,
            sequence=result.sequence,
            actions=[action.name for action in result.actions],
        )
        if result.status == "pending":
            self.hooks.update_status(result.sequence)
        elif result.status in {"miss", "remap_loop"}:
            self.hooks.update_status(f"{result.status}: {result.sequence}")
        else:
            self.hooks.update_status("")
        for action in result.actions:
            self.hooks.dispatch_action(action)

    def _log(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"pending={self.processor.pending!r}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items())
        self.hooks.log(" ".join(parts))


__all__ = ["TextualKeyAdapter", "TextualUIHooks"]
