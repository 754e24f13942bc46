"""Template resolution and subprocess execution for single steps."""

from __future__ import annotations

import subprocess
from typing import List, Protocol, Sequence

from git_chord.runtime import telemetry

from .console import Echo, stderr_echo
from .errors import ExecutionFailureError, MissingArgumentError
from .models import PLACEHOLDER, ArgPolicy, CommandSpec, ExecutionStep, ResolvedCommand
from .registry import ChordRegistry

COMMAND_NOT_FOUND = 127


class CommandRunner(Protocol):
    def run(self, argv: Sequence[str]) -> int:
        ...


class SubprocessRunner:
    """Runs the argv directly; git's output goes straight to the terminal."""

    def __init__(
        self, *, cwd: str | None = None, logger_name: str | None = None
    ) -> None:
        self._cwd = cwd
        self._logger_name = logger_name

    def run(self, argv: Sequence[str]) -> int:
        try:
            completed = subprocess.run(list(argv), cwd=self._cwd, check=False)
        except FileNotFoundError:
            telemetry.record_event(
                "runner.not_found",
                level="error",
                data={"program": argv[0]},
                logger_name=self._logger_name,
            )
            return COMMAND_NOT_FOUND
        return completed.returncode


class DryRunRunner:
    """Records every argv and reports success without running anything."""

    def __init__(self) -> None:
        self.calls: List[tuple[str, ...]] = []

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(tuple(argv))
        return 0


def _placeholder_value(spec: CommandSpec, argument: str) -> str:
    # A no-argument command ignores any text bound to it.
    if spec.arg_policy is ArgPolicy.NONE:
        return ""
    if argument:
        return argument
    if spec.arg_policy is ArgPolicy.OPTIONAL and spec.default:
        return spec.default
    if spec.arg_policy is ArgPolicy.REQUIRED:
        raise MissingArgumentError(spec.key)
    return ""


def render_template(spec: CommandSpec, argument: str) -> tuple[str, ...]:
    """Fill the placeholder; a bare placeholder token left empty is dropped."""

    value = _placeholder_value(spec, argument)
    argv: list[str] = []
    for token in spec.argv_template:
        if token == PLACEHOLDER and not value:
            continue
        argv.append(token.replace(PLACEHOLDER, value))
    return tuple(argv)


class StepExecutor:
    """Resolves one :class:`ExecutionStep` into argv and runs it."""

    def __init__(
        self,
        registry: ChordRegistry,
        runner: CommandRunner | None = None,
        *,
        echo: Echo = stderr_echo,
        logger_name: str | None = None,
    ) -> None:
        self._registry = registry
        self.runner: CommandRunner = runner or SubprocessRunner(logger_name=logger_name)
        self._echo = echo
        self._logger_name = logger_name

    def resolve(self, step: ExecutionStep) -> ResolvedCommand:
        multi = self._registry.lookup_multi(step.key)
        if multi is not None:
            return ResolvedCommand(key=step.key, argv=multi.argv)

        spec = self._registry.lookup(step.key)
        if spec is None:
            raise KeyError(f"Command '{step.key}' is not registered")
        return ResolvedCommand(key=step.key, argv=render_template(spec, step.argument))

    def execute(self, step: ExecutionStep) -> ResolvedCommand:
        with telemetry.span(
            "chords::execute",
            logger_name=self._logger_name,
            component="chords",
            metadata={"key": step.key},
        ) as handle:
            command = self.resolve(step)
            handle.add_metadata("argv", command.display)
            self._echo(f"→ {command.display}")
            returncode = self.runner.run(command.argv)
            handle.add_metadata("returncode", returncode)
            if returncode != 0:
                raise ExecutionFailureError(step.key, returncode, command.argv)
            return command


__all__ = [
    "CommandRunner",
    "SubprocessRunner",
    "DryRunRunner",
    "StepExecutor",
    "render_template",
    "COMMAND_NOT_FOUND",
]
