from viewkeys.keymaps import (
    BindingKind,
    ConfigBinding,
    KeyBindingManager,
    ViewId,
    apply_config_bindings,
)
from viewkeys.keymaps import defaults as keys


def test_apply_action_entries_by_view_name() -> None:
    manager = KeyBindingManager()

    report = apply_config_bindings(
        manager,
        [
            ConfigBinding("main", "x", "<vk-exit>"),
            ConfigBinding(ViewId.REF, "<C-n>", "<vk-next-line>"),
        ],
    )

    assert report.ok
    assert len(report.applied) == 2
    assert manager.resolve([ViewId.MAIN], "x").action == keys.EXIT
    assert manager.resolve([ViewId.REF], "<C-n>").action == keys.NEXT_LINE


def test_unknown_action_is_rejected_and_prior_binding_kept() -> None:
    manager = KeyBindingManager()
    entry = ConfigBinding("all", "j", "<vk-bogus>")

    report = apply_config_bindings(manager, [entry])

    assert not report.ok
    assert report.rejected[0].entry == entry
    assert "<vk-bogus>" in report.rejected[0].reason
    assert manager.resolve([ViewId.MAIN], "j").action == keys.NEXT_LINE


def test_invalid_entries_do_not_stop_later_entries() -> None:
    manager = KeyBindingManager()

    report = apply_config_bindings(
        manager,
        [
            ConfigBinding("sidebar", "x", "<vk-exit>"),
            ConfigBinding("main", "", "<vk-exit>"),
            ConfigBinding("diff", "x", "<vk-select>"),
        ],
    )

    assert [r.entry.view for r in report.rejected] == ["sidebar", "main"]
    assert [e.view for e in report.applied] == ["diff"]
    assert manager.resolve([ViewId.DIFF], "x").action == keys.SELECT
    assert ViewId.HISTORY not in manager.stats().views


def test_keystring_entries_install_replacements() -> None:
    manager = KeyBindingManager()

    report = apply_config_bindings(
        manager,
        [ConfigBinding(ViewId.ALL, "J", "jjj", kind=BindingKind.KEYSTRING)],
    )

    result = manager.resolve([ViewId.COMMIT], "J")
    assert report.ok
    assert result.is_keystring
    assert result.binding.keystring == "jjj"


def test_empty_keystring_replacement_is_rejected() -> None:
    manager = KeyBindingManager()

    report = apply_config_bindings(
        manager,
        [ConfigBinding(ViewId.ALL, "J", "", kind=BindingKind.KEYSTRING)],
    )

    assert len(report.rejected) == 1
    assert manager.resolve([ViewId.COMMIT], "J").action == keys.NO_ACTION


def test_kind_accepts_plain_strings_from_loaders() -> None:
    manager = KeyBindingManager()

    report = apply_config_bindings(
        manager,
        [
            ConfigBinding("all", "J", "jjj", kind="keystring"),
            ConfigBinding("all", "K", "<vk-exit>", kind="remap"),
        ],
    )

    assert [e.sequence for e in report.applied] == ["J"]
    assert manager.resolve([ViewId.MAIN], "J").binding.keystring == "jjj"
    assert len(report.rejected) == 1
    assert "remap" in report.rejected[0].reason
    assert manager.resolve([ViewId.MAIN], "K").action == keys.NO_ACTION
