from __future__ import annotations

from typing import Sequence

from viewkeys.dispatch import KeySequenceProcessor, split_keys
from viewkeys.keymaps import Action, KeyBindingManager, ViewId
from viewkeys.keymaps import defaults as keys
from viewkeys.runtime.settings import EngineSettings


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_processor(
    manager: KeyBindingManager | None = None,
    *,
    views: Sequence[ViewId] = (ViewId.MAIN,),
    clock: FakeClock | None = None,
    max_remap_depth: int = 5,
) -> KeySequenceProcessor:
    return KeySequenceProcessor(
        manager or KeyBindingManager(),
        view_provider=lambda: views,
        settings=EngineSettings(sequence_timeout_ms=500, max_remap_depth=max_remap_depth),
        clock=clock or FakeClock(),
    )


def make_action(name: str) -> Action:
    return Action(f"<vk-{name}>")


def test_single_key_action() -> None:
    processor = make_processor()

    result = processor.feed("j")

    assert result.status == "action"
    assert result.actions == (keys.NEXT_LINE,)
    assert result.action == keys.NEXT_LINE
    assert processor.pending == ""


def test_multi_key_sequence_waits_then_fires() -> None:
    processor = make_processor()

    first = processor.feed("g")
    second = processor.feed("g")

    assert first.status == "pending"
    assert first.actions == ()
    assert first.sequence == "g"
    assert first.timeout_ms == 500
    assert second.status == "action"
    assert second.action == keys.FIRST_LINE


def test_unbound_key_is_a_miss() -> None:
    processor = make_processor()

    result = processor.feed("z")

    assert result.status == "miss"
    assert result.action == keys.NO_ACTION


def test_broken_sequence_discards_buffer() -> None:
    processor = make_processor()

    processor.feed("g")
    result = processor.feed("z")

    assert result.status == "miss"
    assert result.sequence == "gz"
    assert processor.pending == ""
    assert processor.feed("j").action == keys.NEXT_LINE


def test_tokens_accumulate_into_chords() -> None:
    processor = make_processor()

    assert processor.feed("<C-w>").status == "pending"
    assert processor.feed("w").action == keys.NEXT_VIEW


def test_view_provider_selects_scope() -> None:
    main = make_processor(views=(ViewId.MAIN,))
    ref = make_processor(views=(ViewId.REF,))

    assert main.feed(":").action == keys.PROMPT
    assert ref.feed(":").status == "miss"


def test_held_binding_fires_when_next_key_breaks_sequence() -> None:
    manager = KeyBindingManager()
    manager.set_action_binding(ViewId.ALL, "g", make_action("g"))

    processor = make_processor(manager)

    held = processor.feed("g")
    result = processor.feed("j")

    assert held.status == "pending"
    assert result.status == "action"
    assert result.actions == (make_action("g"), keys.NEXT_LINE)


def test_held_binding_replays_keys_typed_after_it() -> None:
    manager = KeyBindingManager(defaults=None)
    manager.set_action_binding(ViewId.MAIN, "g", make_action("g"))
    manager.set_action_binding(ViewId.MAIN, "gxy", make_action("gxy"))
    manager.set_action_binding(ViewId.ALL, "x", make_action("x"))
    processor = make_processor(manager)

    processor.feed("g")
    assert processor.feed("x").status == "pending"
    result = processor.feed("z")

    assert result.actions == (make_action("g"), make_action("x"))
    assert processor.pending == ""


def test_held_binding_fires_on_timeout() -> None:
    manager = KeyBindingManager()
    manager.set_action_binding(ViewId.ALL, "g", make_action("g"))
    clock = FakeClock()
    processor = make_processor(manager, clock=clock)

    processor.feed("g")
    clock.now = 0.4
    assert processor.process_timeouts() is None

    clock.now = 0.6
    result = processor.process_timeouts()

    assert result is not None
    assert result.status == "action"
    assert result.actions == (make_action("g"),)
    assert processor.pending == ""


def test_timeout_without_held_binding_discards() -> None:
    clock = FakeClock()
    processor = make_processor(clock=clock)

    processor.feed("g")
    clock.now = 1.0
    result = processor.process_timeouts()

    assert result is not None
    assert result.status == "timeout"
    assert result.sequence == "g"
    assert result.actions == ()
    assert processor.pending == ""


def test_force_timeout_with_empty_buffer() -> None:
    processor = make_processor()

    assert processor.force_timeout() is None
    processor.feed("<C-w>")
    assert processor.force_timeout().status == "timeout"


def test_keystring_binding_replays_each_key() -> None:
    manager = KeyBindingManager()
    manager.set_keystring_binding(ViewId.ALL, "J", "jjj")
    processor = make_processor(manager)

    result = processor.feed("J")

    assert result.status == "action"
    assert result.actions == (keys.NEXT_LINE,) * 3


def test_keystring_binding_can_target_action_names() -> None:
    manager = KeyBindingManager()
    manager.set_keystring_binding(ViewId.MAIN, "n", "<vk-next-view>")
    processor = make_processor(manager)

    assert processor.feed("n").actions == (keys.NEXT_VIEW,)


def test_keystring_replay_may_leave_a_pending_sequence() -> None:
    manager = KeyBindingManager()
    manager.set_keystring_binding(ViewId.MAIN, "w", "<C-w>")
    processor = make_processor(manager)

    assert processor.feed("w").status == "pending"
    assert processor.feed("o").action == keys.FULL_SCREEN_VIEW


def test_keystring_cycle_stops_at_depth_limit() -> None:
    manager = KeyBindingManager(defaults=None)
    manager.set_keystring_binding(ViewId.ALL, "a", "b")
    manager.set_keystring_binding(ViewId.ALL, "b", "a")
    processor = make_processor(manager, max_remap_depth=4)

    result = processor.feed("a")

    assert result.status == "remap_loop"
    assert result.actions == ()
    assert processor.pending == ""


def test_keystring_cycle_with_large_configured_depth_reports_loop() -> None:
    manager = KeyBindingManager(defaults=None)
    manager.set_keystring_binding(ViewId.ALL, "a", "b")
    manager.set_keystring_binding(ViewId.ALL, "b", "a")
    processor = make_processor(manager, max_remap_depth=900)

    result = processor.feed("a")

    assert result.status == "remap_loop"
    assert result.actions == ()
    assert processor.pending == ""


def test_reset_clears_pending_sequence() -> None:
    processor = make_processor()

    processor.feed("g")
    processor.reset()

    assert processor.pending == ""
    assert processor.deadline is None


def test_split_keys() -> None:
    assert split_keys("<C-w>wj") == ["<C-w>", "w", "j"]
    assert split_keys("<") == ["<"]
    assert split_keys("a<b") == ["a", "<", "b"]
    assert split_keys("") == []
