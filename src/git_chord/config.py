"""Runtime settings for the ``g`` command."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from git_chord.chords.defaults import DEFAULT_BRANCH
from git_chord.chords.sequencer import EMPTY_CHORD
from git_chord.chords.tokenizer import QUOTE

ENV_PREFIX = "GIT_CHORD_"
AUTO_BRANCH = "auto"


def _flag(raw: Optional[str], fallback: bool) -> bool:
    if raw is None:
        return fallback
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ChordSettings:
    """Knobs shared by the CLI and the chord picker.

    ``default_branch`` of ``"auto"`` asks git for ``origin/HEAD`` when the
    registry is built.
    """

    default_branch: str = DEFAULT_BRANCH
    empty_chord: str = EMPTY_CHORD
    quote: str = QUOTE
    echo: bool = True
    dry_run: bool = False
    log_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.default_branch:
            raise ValueError("default_branch cannot be empty")
        if len(self.quote) != 1:
            raise ValueError("quote must be a single character")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ChordSettings":
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        return cls(
            default_branch=get("DEFAULT_BRANCH") or DEFAULT_BRANCH,
            empty_chord=get("EMPTY_CHORD") or EMPTY_CHORD,
            quote=get("QUOTE") or QUOTE,
            echo=not _flag(get("QUIET"), False),
            dry_run=_flag(get("DRY_RUN"), False),
            log_preset=get("LOG_PRESET") or None,
        )

    def merged(self, **changes: object) -> "ChordSettings":
        """Copy with every non-``None`` change applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["ChordSettings", "AUTO_BRANCH", "ENV_PREFIX"]
