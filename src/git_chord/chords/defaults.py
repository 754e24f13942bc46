"""Built-in chord tables."""

from __future__ import annotations

from typing import Iterable, Sequence, TypeVar

from .models import ArgPolicy, CommandSpec, MacroSpec, MultiCommandSpec
from .registry import ChordRegistry

DEFAULT_BRANCH = "main"

T = TypeVar("T", CommandSpec, MultiCommandSpec, MacroSpec)


def default_commands(default_branch: str = DEFAULT_BRANCH) -> tuple[CommandSpec, ...]:
    return (
        # Basic operations
        CommandSpec("a", "git add .", description="add all changes"),
        CommandSpec("s", "git status", description="status"),
        CommandSpec("f", "git fetch", description="fetch"),
        CommandSpec("F", "git pull", description="pull"),
        CommandSpec("l", "git log --oneline -20", description="short log"),
        CommandSpec("L", "git log", description="full log"),
        CommandSpec("u", "git reset HEAD^ --soft", description="uncommit"),
        CommandSpec("p", "git push", description="push"),
        CommandSpec("P", "git push --force", description="force push"),
        # Branches
        CommandSpec(
            "x",
            "git checkout {}",
            ArgPolicy.OPTIONAL,
            default=default_branch,
            description="check out a branch",
        ),
        CommandSpec(
            "n", "git checkout -b {}", ArgPolicy.REQUIRED, description="new branch"
        ),
        CommandSpec(
            "d", "git branch -D {}", ArgPolicy.REQUIRED, description="delete branch"
        ),
        CommandSpec(
            "b", "git branch {}", ArgPolicy.OPTIONAL, description="branch (no arg lists)"
        ),
        CommandSpec("m", "git merge {}", ArgPolicy.REQUIRED, description="merge"),
        # Commits
        CommandSpec(
            "c", 'git commit -m "{}"', ArgPolicy.REQUIRED, description="commit"
        ),
        CommandSpec("e", "git commit --amend", description="edit last commit"),
        CommandSpec(
            "E", "git commit --amend --no-edit", description="amend without edit"
        ),
        CommandSpec(
            "r",
            "git rebase {}",
            ArgPolicy.OPTIONAL,
            default=default_branch,
            description="rebase",
        ),
        # Stash ("hold")
        CommandSpec("h", "git stash", description="stash (hold)"),
        CommandSpec("H", "git stash pop", description="stash pop (unhold)"),
        CommandSpec("S", "git diff --staged", description="staged diff"),
    )


DEFAULT_MULTI: tuple[MultiCommandSpec, ...] = (
    MultiCommandSpec("pf", "git push --force", "force push"),
    MultiCommandSpec("pu", "git push -u origin HEAD", "push and set upstream"),
    MultiCommandSpec("ra", "git rebase --abort", "abort rebase"),
    MultiCommandSpec("rc", "git rebase --continue", "continue rebase"),
    MultiCommandSpec("rs", "git rebase --skip", "skip rebase step"),
    MultiCommandSpec("ha", "git stash apply", "stash apply"),
    MultiCommandSpec("hl", "git stash list", "stash list"),
    MultiCommandSpec("hp", "git stash pop", "stash pop"),
    MultiCommandSpec("hd", "git stash drop", "stash drop"),
)


def default_macros(default_branch: str = DEFAULT_BRANCH) -> tuple[MacroSpec, ...]:
    return (
        MacroSpec.parse(
            "R", "x:F:x {branch}:r", description="sync rebase onto the default branch"
        ),
        MacroSpec.parse(
            "M",
            f"x:F:x {{branch}}:m {default_branch}",
            description="sync merge from the default branch",
        ),
        MacroSpec.parse("W", "p:x", description="wrap up: push, back to default"),
    )


def load_default_registry(
    *,
    default_branch: str = DEFAULT_BRANCH,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    extra_commands: Iterable[CommandSpec] = (),
    extra_multi: Iterable[MultiCommandSpec] = (),
    extra_macros: Iterable[MacroSpec] = (),
    replace: bool = False,
    logger_name: str | None = None,
) -> ChordRegistry:
    """Build the built-in tables, filtered by key, plus any extra entries.

    ``include``/``exclude`` apply to keys of every table. A macro whose steps
    point at a filtered-out key fails registry validation, so filter macros
    alongside the commands they use.
    """

    filters = _build_filters(include, exclude)
    registry = ChordRegistry(
        _selected(default_commands(default_branch), filters),
        _selected(DEFAULT_MULTI, filters),
        _selected(default_macros(default_branch), filters),
        logger_name=logger_name,
    )
    if extra_commands or extra_multi or extra_macros:
        registry = registry.extend(
            commands=extra_commands,
            multi=extra_multi,
            macros=extra_macros,
            replace=replace,
        )
    return registry


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include is not None else None
    return include_set, set(exclude or ())


def _selected(
    entries: Iterable[T], filters: tuple[set[str] | None, set[str]]
) -> tuple[T, ...]:
    include, exclude = filters
    return tuple(
        entry
        for entry in entries
        if (include is None or entry.key in include) and entry.key not in exclude
    )


__all__ = [
    "DEFAULT_BRANCH",
    "DEFAULT_MULTI",
    "default_commands",
    "default_macros",
    "load_default_registry",
]
