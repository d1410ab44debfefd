import pytest

from viewkeys.runtime import telemetry


def test_presets_offered_to_the_demo_cli() -> None:
    assert telemetry.preset_names() == ("development", "production", "quiet")


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError, match="quiet"):
        telemetry.configure(preset="verbose")


def test_config_and_preset_are_exclusive() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")
