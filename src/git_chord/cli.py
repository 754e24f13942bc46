"""``g`` console entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from git_chord import __version__
from git_chord.chords import (
    BranchResolver,
    BranchSource,
    ChordError,
    ChordRegistry,
    ChordSequencer,
    CommandRunner,
    load_default_registry,
    render_reference,
)
from git_chord.chords.console import silent, stderr_echo
from git_chord.chords.defaults import DEFAULT_BRANCH
from git_chord.config import AUTO_BRANCH, ChordSettings
from git_chord.runtime import telemetry

EXIT_OK = 0
EXIT_FAILURE = 1


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="g",
        description="Run git commands typed as short chords, e.g. `g acp \"msg\"`.",
    )
    parser.add_argument(
        "chord",
        nargs="?",
        default="",
        help="Chord to run (empty runs the status command)",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Positional arguments bound left to right to commands that take one",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        default=None,
        help="Print the resolved git commands without running them",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not echo commands before running them",
    )
    parser.add_argument(
        "--commands",
        action="store_true",
        help="Print the command reference and exit",
    )
    parser.add_argument(
        "--pick",
        action="store_true",
        help="Compose the chord in an interactive preview, then run it",
    )
    parser.add_argument(
        "--default-branch",
        default=None,
        help=f"Default for checkout/rebase (default: {DEFAULT_BRANCH}; "
        f"'{AUTO_BRANCH}' reads origin/HEAD)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="telelog preset to use for this run",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def build_registry(settings: ChordSettings, branches: BranchSource) -> ChordRegistry:
    default_branch = settings.default_branch
    if default_branch == AUTO_BRANCH:
        if isinstance(branches, BranchResolver):
            default_branch = branches.default_branch(DEFAULT_BRANCH)
        else:
            default_branch = DEFAULT_BRANCH
    return load_default_registry(default_branch=default_branch)


def build_sequencer(
    settings: ChordSettings,
    *,
    runner: CommandRunner | None = None,
    branch_source: BranchSource | None = None,
) -> ChordSequencer:
    branches = branch_source or BranchResolver()
    return ChordSequencer(
        build_registry(settings, branches),
        runner=runner,
        branch_source=branches,
        echo=stderr_echo if settings.echo else silent,
        empty_chord=settings.empty_chord,
        quote=settings.quote,
    )


def _dry_run(
    sequencer: ChordSequencer, chord: str, args: Sequence[str], out: TextIO
) -> None:
    for command in sequencer.plan(chord, args):
        print(command.display, file=out)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    runner: CommandRunner | None = None,
    branch_source: BranchSource | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = _parse_args(argv)
    out = stdout or sys.stdout
    try:
        settings = ChordSettings.from_env().merged(
            dry_run=args.dry_run,
            echo=False if args.quiet else None,
            default_branch=args.default_branch,
            log_preset=args.log_preset,
        )
        if settings.log_preset:
            telemetry.configure(preset=settings.log_preset)
    except ValueError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        return EXIT_FAILURE

    sequencer = build_sequencer(settings, runner=runner, branch_source=branch_source)

    if args.commands:
        out.write(render_reference(sequencer.registry))
        return EXIT_OK

    chord, positional = args.chord, tuple(args.args)
    if args.pick:
        from git_chord.adapters.textual.app import pick_chord

        picked = pick_chord(sequencer, chord=chord, args=positional)
        if picked is None:
            return EXIT_OK
        chord, positional = picked

    try:
        if settings.dry_run:
            _dry_run(sequencer, chord, positional, out)
        else:
            sequencer.invoke(chord, positional)
    except ChordError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
