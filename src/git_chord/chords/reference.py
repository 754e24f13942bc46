"""Plain-text command reference generated from a registry."""

from __future__ import annotations

from typing import Iterable

from .models import MacroSpec
from .registry import ChordRegistry

USAGE = """\
USAGE
  g <chord> [args...]

SYNTAX
  g acp "Fix bug"              positional args, consumed left to right
  g x"branch"ac"message"p      inline quoted args"""

EXAMPLES = """\
EXAMPLES
  g                            git status
  g acp "Fix bug"              add, commit, push
  g x                          checkout the default branch
  g n"feature"ac"WIP"          new branch, add, commit
  g hxFH                       stash, checkout, pull, pop
  g ac"Done"R                  commit, then sync-rebase"""


def _short(command: str) -> str:
    return command[4:] if command.startswith("git ") else command


def _rows(entries: Iterable[tuple[str, str, str]]) -> list[str]:
    lines = []
    for key, command, description in entries:
        line = f"  {key:<4}{command:<28}"
        if description:
            line += f"({description})"
        lines.append(line.rstrip())
    return lines


def _macro_flow(macro: MacroSpec) -> str:
    return " → ".join(
        f"{step.key} {step.argument}" if step.argument else step.key
        for step in macro.steps
    )


def render_reference(registry: ChordRegistry, *, title: str = "git-chord") -> str:
    """Describe every key in ``registry`` the way ``g --commands`` prints it."""

    sections = [f"{title} - Vim-style composable git commands", USAGE]
    commands = [
        (spec.key, _short(spec.usage), spec.description)
        for spec in registry.iter_commands()
    ]
    if commands:
        sections.append("\n".join(["COMMANDS", *_rows(commands)]))
    multi = [
        (spec.key, _short(spec.command), spec.description)
        for spec in registry.iter_multi()
    ]
    if multi:
        sections.append("\n".join(["MULTI-CHAR", *_rows(multi)]))
    macros = [
        (macro.key, _macro_flow(macro), macro.description)
        for macro in registry.iter_macros()
    ]
    if macros:
        sections.append("\n".join(["MACROS (capture current branch)", *_rows(macros)]))
    sections.append(EXAMPLES)
    return "\n\n".join(sections) + "\n"


__all__ = ["render_reference"]
