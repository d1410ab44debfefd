"""Incremental key reading loop driving ``KeyBindingManager.resolve``."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional

from viewkeys.keymaps import Action, Binding, KeyBindingManager, NO_ACTION, ViewHierarchy
from viewkeys.runtime import telemetry
from viewkeys.runtime.settings import EngineSettings

ViewProvider = Callable[[], ViewHierarchy]

_KEY_TOKEN = re.compile(r"<[^<>\s]+>|.", re.DOTALL)


def split_keys(text: str) -> list[str]:
    """Split ``"<C-w>wj"`` into ``["<C-w>", "w", "j"]``."""

    return _KEY_TOKEN.findall(text)


@dataclass(frozen=True, slots=True)
class InputResult:
    """Outcome of one ``feed`` or timeout flush.

    ``actions`` lists what the caller should execute, in order. ``status``
    describes the buffer afterwards: ``pending`` while a longer binding may
    still match, ``action`` once actions fired and the buffer is empty.
    """

    status: Literal["action", "pending", "miss", "timeout", "remap_loop"]
    actions: tuple[Action, ...] = ()
    sequence: str = ""
    timeout_ms: Optional[int] = None

    @property
    def action(self) -> Action:
        return self.actions[0] if self.actions else NO_ACTION


class KeySequenceProcessor:
    """Accumulates key tokens until they resolve, expire or fail.

    A binding that is also the prefix of a longer one (``g`` next to ``gg``)
    is held back until the next key or the timeout decides it. Keystring
    bindings are replayed token by token, nested at most ``max_remap_depth``
    times.
    """

    def __init__(
        self,
        manager: KeyBindingManager,
        *,
        view_provider: Optional[ViewProvider] = None,
        settings: Optional[EngineSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        self.manager = manager
        self.settings = settings or EngineSettings.from_env()
        self._view_provider = view_provider or (lambda: ())
        self._clock = clock
        self._logger_name = logger_name or "viewkeys.dispatch"
        self._buffer = ""
        self._fallback: Optional[Binding] = None
        self._fallback_len = 0
        self._deadline: Optional[float] = None
        self._looped = False

    @property
    def pending(self) -> str:
        return self._buffer

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def reset(self) -> None:
        self._buffer = ""
        self._fallback = None
        self._fallback_len = 0
        self._deadline = None

    def feed(self, token: str) -> InputResult:
        sequence = self._buffer + token
        emitted: List[Action] = []
        with telemetry.span(
            "dispatch::feed",
            logger_name=self._logger_name,
            component="dispatch",
            metadata={"length": len(sequence)},
        ) as handle:
            self._looped = False
            self._step(token, emitted, depth=0)
            result = self._result(sequence, emitted, idle_status="miss")
            handle.add_metadata("status", result.status)
        return result

    def process_timeouts(self) -> Optional[InputResult]:
        """Flush the buffer if its deadline has passed."""

        if not self._buffer or self._deadline is None:
            return None
        if self._clock() < self._deadline:
            return None
        return self._expire()

    def force_timeout(self) -> Optional[InputResult]:
        if not self._buffer:
            return None
        return self._expire()

    def _expire(self) -> InputResult:
        sequence = self._buffer
        emitted: List[Action] = []
        self._looped = False
        with telemetry.span(
            "dispatch::timeout",
            logger_name=self._logger_name,
            component="dispatch",
            metadata={"length": len(sequence)},
        ):
            self._release("", emitted, depth=0)
        return self._result(sequence, emitted, idle_status="timeout")

    def _step(self, token: str, emitted: List[Action], depth: int) -> None:
        candidate = self._buffer + token
        result = self.manager.resolve(tuple(self._view_provider()), candidate)

        if result.status == "match":
            if result.is_prefix:
                self._hold(candidate, result.binding)
                return
            self.reset()
            self._apply(result.binding, emitted, depth)
            return

        if result.is_prefix:
            self._buffer = candidate
            self._arm()
            return

        if self._fallback is not None:
            self._release(token, emitted, depth)
        else:
            self.reset()

    def _release(self, tail: str, emitted: List[Action], depth: int) -> None:
        """Fire the held binding, then replay the keys typed after it."""

        fallback = self._fallback
        remainder = (self._buffer + tail)[self._fallback_len :]
        self.reset()
        if fallback is None:
            return
        self._apply(fallback, emitted, depth)
        for token in split_keys(remainder):
            if self._looped:
                return
            self._step(token, emitted, depth)

    def _apply(self, binding: Binding, emitted: List[Action], depth: int) -> None:
        if not binding.is_keystring:
            emitted.append(binding.action)
            return

        if depth >= self.settings.max_remap_depth:
            self.reset()
            self._looped = True
            telemetry.record_event(
                "dispatch.remap_loop",
                level="warning",
                data={"keys": binding.keystring, "depth": depth},
                logger_name=self._logger_name,
            )
            return

        for token in split_keys(binding.keystring):
            self._step(token, emitted, depth + 1)
            if self._looped:
                return

    def _hold(self, candidate: str, fallback: Binding) -> None:
        self._buffer = candidate
        self._fallback = fallback
        self._fallback_len = len(candidate)
        self._arm()

    def _arm(self) -> None:
        self._deadline = self._clock() + self.settings.sequence_timeout_ms / 1000.0

    def _result(
        self, sequence: str, emitted: List[Action], *, idle_status: str
    ) -> InputResult:
        if self._looped:
            status = "remap_loop"
        elif self._buffer:
            status = "pending"
        elif emitted:
            status = "action"
        else:
            status = idle_status
        return InputResult(
            status=status,  # type: ignore[arg-type]
            actions=tuple(emitted),
            sequence=self._buffer or sequence,
            timeout_ms=self.settings.sequence_timeout_ms if self._buffer else None,
        )


__all__ = ["InputResult", "KeySequenceProcessor", "split_keys"]
