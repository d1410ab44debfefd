"""Executable Textual demo: a few panels driven by resolved key sequences."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use viewkeys.adapters.textual.app"
    ) from exc

from viewkeys.dispatch import KeySequenceProcessor
from viewkeys.keymaps import Action, KeyBindingManager, ViewId
from viewkeys.keymaps import defaults as keys
from viewkeys.runtime import telemetry
from viewkeys.runtime.settings import MAX_REMAP_DEPTH_LIMIT, EngineSettings

from .controller import TextualKeyAdapter, TextualUIHooks

PANEL_VIEWS: tuple[ViewId, ...] = (ViewId.MAIN, ViewId.REF, ViewId.COMMIT, ViewId.DIFF)
PANEL_ROWS = 20


@dataclass
class PanelState:
    view: ViewId
    cursor: int = 0
    rows: list[str] = field(default_factory=list)

    def render(self, focused: bool) -> str:
        marker = "*" if focused else " "
        lines = [f"{marker} {self.view.name}"]
        for index, row in enumerate(self.rows):
            pointer = ">" if index == self.cursor else " "
            lines.append(f"{pointer} {row}")
        return "\n".join(lines)


class ViewKeysApp(App[None]):
    """Minimal Textual UI hosting the key binding engine."""

    CSS = """
	Horizontal {
		height: 1fr;
	}

	.panel {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(self, *, settings: Optional[EngineSettings] = None) -> None:
        super().__init__()
        self._settings = settings or EngineSettings.from_env()
        self._panels = [
            PanelState(view, rows=[f"{view.name.lower()} row {n}" for n in range(PANEL_ROWS)])
            for view in PANEL_VIEWS
        ]
        self._focus = 0
        self._widgets: Dict[ViewId, Static] = {}
        self._status_widget: Static | None = None
        self.manager = KeyBindingManager(logger_name="viewkeys.keymaps")
        self.processor = KeySequenceProcessor(
            self.manager,
            view_provider=self._view_hierarchy,
            settings=self._settings,
        )
        self.adapter = TextualKeyAdapter(
            self.processor,
            TextualUIHooks(
                dispatch_action=self._dispatch_action,
                update_status=self._update_status,
            ),
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            for panel in self._panels:
                widget = Static("", classes="panel")
                self._widgets[panel.view] = widget
                yield widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_panels()
        self.set_interval(0.1, self.adapter.process_timeouts)

    async def on_key(self, event: events.Key) -> None:
        if self.adapter.handle_textual_key(event.key, character=event.character):
            event.stop()
            event.prevent_default()

    def _view_hierarchy(self) -> tuple[ViewId, ...]:
        return (self._panels[self._focus].view,)

    def _dispatch_action(self, action: Action) -> None:
        panel = self._panels[self._focus]
        last = len(panel.rows) - 1
        if action == keys.EXIT:
            self.exit()
            return
        if action == keys.NEXT_VIEW:
            self._focus = (self._focus + 1) % len(self._panels)
        elif action == keys.PREV_VIEW:
            self._focus = (self._focus - 1) % len(self._panels)
        elif action == keys.NEXT_LINE:
            panel.cursor = min(panel.cursor + 1, last)
        elif action == keys.PREV_LINE:
            panel.cursor = max(panel.cursor - 1, 0)
        elif action == keys.FIRST_LINE:
            panel.cursor = 0
        elif action == keys.LAST_LINE:
            panel.cursor = last
        else:
            self._update_status(f"{action.name}: {action.description}")
        self._refresh_panels()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _refresh_panels(self) -> None:
        for index, panel in enumerate(self._panels):
            widget = self._widgets.get(panel.view)
            if widget:
                widget.update(panel.render(index == self._focus))


def _remap_depth(raw: str) -> int:
    value = int(raw)
    if not 1 <= value <= MAX_REMAP_DEPTH_LIMIT:
        raise argparse.ArgumentTypeError(
            f"must be between 1 and {MAX_REMAP_DEPTH_LIMIT}, got {value}"
        )
    return value


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EngineSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the viewkeys Textual demo.")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=defaults.sequence_timeout_ms,
        help="Milliseconds to wait for the rest of a multi-key sequence",
    )
    parser.add_argument(
        "--max-remap-depth",
        type=_remap_depth,
        default=defaults.max_remap_depth,
        help=f"Nesting limit for keystring remaps (1-{MAX_REMAP_DEPTH_LIMIT})",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.preset_names(),
        default="quiet",
        help="Telemetry preset; console logging would draw over the UI",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    settings = EngineSettings(
        sequence_timeout_ms=args.timeout_ms,
        max_remap_depth=args.max_remap_depth,
    )
    ViewKeysApp(settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
