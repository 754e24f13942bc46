"""Textual chord picker: type a chord, watch the git commands it will run."""

from __future__ import annotations

import shlex
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the picker is opened
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use git_chord.adapters.textual.app"
    ) from exc

from git_chord.chords import ChordSequencer

from .controller import ChordPreviewAdapter, ChordPreviewHooks

Selection = tuple[str, tuple[str, ...]]


class ChordPickerApp(App[Optional[Selection]]):
    """Two inputs (chord, arguments) over a live plan of git commands."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#plan-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+q", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        sequencer: ChordSequencer,
        *,
        chord: str = "",
        args: Sequence[str] = (),
    ) -> None:
        super().__init__()
        self._sequencer = sequencer
        self._initial_chord = chord
        self._initial_args = shlex.join(args)
        self.adapter: ChordPreviewAdapter | None = None
        self._plan_widget: Static | None = None
        self._status_widget: Static | None = None
        self._log_lines: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="inputs"):
            yield Input(value=self._initial_chord, placeholder="chord, e.g. acp", id="chord")
            yield Input(
                value=self._initial_args, placeholder='arguments, e.g. "Fix bug"', id="args"
            )
        self._plan_widget = Static("", id="plan-view")
        self._status_widget = Static("", id="status-line")
        yield self._plan_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        hooks = ChordPreviewHooks(
            show_plan=self._show_plan,
            update_status=self._update_status,
            log=self._log_lines.append,
        )
        self.adapter = ChordPreviewAdapter.for_sequencer(self._sequencer, hooks)
        self._refresh()

    def on_input_changed(self, event: Input.Changed) -> None:
        del event
        self._refresh()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        del event
        if self.adapter is None:
            return
        self._refresh()
        selection = self.adapter.selection()
        if selection is not None:
            self.exit(selection)

    def action_cancel(self) -> None:
        self.exit(None)

    def _refresh(self) -> None:
        if self.adapter is None:
            return
        chord = self.query_one("#chord", Input).value
        args = self.query_one("#args", Input).value
        self.adapter.update(chord, args)

    def _show_plan(self, lines: tuple[str, ...]) -> None:
        if self._plan_widget:
            self._plan_widget.update("\n".join(f"→ {line}" for line in lines))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def pick_chord(
    sequencer: ChordSequencer,
    *,
    chord: str = "",
    args: Sequence[str] = (),
) -> Optional[Selection]:
    """Run the picker and return the chosen chord and arguments, if any."""

    return ChordPickerApp(sequencer, chord=chord, args=args).run()


__all__ = ["ChordPickerApp", "pick_chord"]
