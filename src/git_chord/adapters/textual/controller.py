"""UI-agnostic controller that previews a chord while it is typed."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Callable, Optional

from git_chord.chords import (
    BranchSource,
    ChordError,
    ChordRegistry,
    ChordSequencer,
    DryRunRunner,
    ResolvedCommand,
)
from git_chord.chords.sequencer import EMPTY_CHORD
from git_chord.chords.tokenizer import QUOTE


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class ChordPreviewHooks:
    """Callbacks the host UI supplies to render previews."""

    show_plan: Callable[[tuple[str, ...]], None]
    update_status: Callable[[str], None] = _noop
    # Advisory lines such as macro expansion notices
    log: Callable[[str], None] = _noop


@dataclass(frozen=True, slots=True)
class ChordPreview:
    chord: str
    args: tuple[str, ...]
    commands: tuple[ResolvedCommand, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class _CachedBranch:
    """Reads the branch on first use only; a picker session is one invocation."""

    def __init__(self, source: BranchSource) -> None:
        self._source = source
        self._name: Optional[str] = None

    def current_branch(self) -> str:
        if self._name is None:
            self._name = self._source.current_branch()
        return self._name


class ChordPreviewAdapter:
    """Re-plans the chord on every edit; nothing is ever executed here."""

    def __init__(
        self,
        registry: ChordRegistry,
        branch_source: BranchSource,
        hooks: ChordPreviewHooks,
        *,
        empty_chord: str = EMPTY_CHORD,
        quote: str = QUOTE,
    ) -> None:
        self.hooks = hooks
        self._sequencer = ChordSequencer(
            registry,
            runner=DryRunRunner(),
            branch_source=_CachedBranch(branch_source),
            echo=lambda line: self.hooks.log(line),
            empty_chord=empty_chord,
            quote=quote,
        )
        self.preview = ChordPreview(chord="", args=())

    @classmethod
    def for_sequencer(
        cls, sequencer: ChordSequencer, hooks: ChordPreviewHooks
    ) -> "ChordPreviewAdapter":
        """Preview with the same registry and chord syntax the host will run."""

        return cls(
            sequencer.registry,
            sequencer.branch_source,
            hooks,
            empty_chord=sequencer.empty_chord,
            quote=sequencer.quote,
        )

    def update(self, chord: str, args_text: str = "") -> ChordPreview:
        try:
            args = tuple(shlex.split(args_text))
        except ValueError as exc:
            return self._publish(ChordPreview(chord=chord, args=(), error=str(exc)))

        try:
            commands = self._sequencer.plan(chord, args)
        except ChordError as exc:
            return self._publish(ChordPreview(chord=chord, args=args, error=str(exc)))
        return self._publish(ChordPreview(chord=chord, args=args, commands=commands))

    def selection(self) -> Optional[tuple[str, tuple[str, ...]]]:
        """Chord and arguments to run, or ``None`` while the preview is invalid."""

        if not self.preview.ok:
            return None
        return self.preview.chord, self.preview.args

    def _publish(self, preview: ChordPreview) -> ChordPreview:
        self.preview = preview
        self.hooks.show_plan(tuple(command.display for command in preview.commands))
        if preview.ok:
            count = len(preview.commands)
            self.hooks.update_status(f"{count} command{'s' if count != 1 else ''}")
        else:
            self.hooks.update_status(f"✗ {preview.error}")
        self.hooks.log(
            f"preview chord={preview.chord!r} args={preview.args!r} ok={preview.ok}"
        )
        return preview


__all__ = ["ChordPreview", "ChordPreviewAdapter", "ChordPreviewHooks"]
