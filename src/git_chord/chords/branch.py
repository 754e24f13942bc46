"""Reads branch names from the working copy for macro expansion."""

from __future__ import annotations

import subprocess
from typing import Optional, Protocol, Sequence

from git_chord.runtime import telemetry

UNKNOWN_BRANCH = "HEAD"
ORIGIN_HEAD_PREFIX = "refs/remotes/origin/"


class BranchSource(Protocol):
    def current_branch(self) -> str:
        ...


class BranchResolver:
    """Queries git for the active branch without ever failing the chord."""

    def __init__(
        self,
        *,
        git: str = "git",
        cwd: str | None = None,
        logger_name: str | None = None,
    ) -> None:
        self._git = git
        self._cwd = cwd
        self._logger_name = logger_name

    def current_branch(self) -> str:
        """Branch name, or the short revision on a detached HEAD, or ``HEAD``."""

        name = self._query("symbolic-ref", "--short", "HEAD")
        if name:
            return name
        revision = self._query("rev-parse", "--short", "HEAD")
        if revision:
            return revision
        telemetry.record_event(
            "branch.unresolved",
            level="warning",
            data={"fallback": UNKNOWN_BRANCH},
            logger_name=self._logger_name,
        )
        return UNKNOWN_BRANCH

    def default_branch(self, fallback: str = "main") -> str:
        """Branch ``origin/HEAD`` points at, or ``fallback``."""

        ref = self._query("symbolic-ref", "refs/remotes/origin/HEAD")
        if ref and ref.startswith(ORIGIN_HEAD_PREFIX):
            return ref[len(ORIGIN_HEAD_PREFIX):] or fallback
        return fallback

    def _query(self, *args: str) -> Optional[str]:
        return _read_git(
            self._git, args, cwd=self._cwd, logger_name=self._logger_name
        )


class FixedBranch:
    """Branch source that always answers the same name."""

    def __init__(self, name: str) -> None:
        self.name = name

    def current_branch(self) -> str:
        return self.name


def _read_git(
    git: str,
    args: Sequence[str],
    *,
    cwd: str | None,
    logger_name: str | None = None,
) -> Optional[str]:
    try:
        completed = subprocess.run(
            [git, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        telemetry.record_event(
            "branch.git_unavailable",
            level="warning",
            data={"error": str(exc)},
            logger_name=logger_name,
        )
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


__all__ = ["BranchResolver", "BranchSource", "FixedBranch", "UNKNOWN_BRANCH"]
