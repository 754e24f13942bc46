from __future__ import annotations

from typing import Sequence

import pytest

from git_chord.chords import (
    ArgPolicy,
    CommandSpec,
    DryRunRunner,
    ExecutionFailureError,
    ExecutionStep,
    MissingArgumentError,
    StepExecutor,
    load_default_registry,
)
from git_chord.chords import executor as executor_module
from git_chord.chords.executor import COMMAND_NOT_FOUND, SubprocessRunner, render_template


class FailingRunner:
    def __init__(self, returncode: int = 1) -> None:
        self.returncode = returncode
        self.calls: list[tuple[str, ...]] = []

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(tuple(argv))
        return self.returncode


def make_executor(runner=None, echo=None) -> StepExecutor:
    return StepExecutor(
        load_default_registry(),
        runner or DryRunRunner(),
        echo=echo or (lambda line: None),
    )


def test_resolve_multi_key_uses_literal_command() -> None:
    command = make_executor().resolve(ExecutionStep(key="pu"))

    assert command.argv == ("git", "push", "-u", "origin", "HEAD")


def test_resolve_bound_argument_stays_one_token() -> None:
    command = make_executor().resolve(ExecutionStep(key="c", argument="Fix bug"))

    assert command.argv == ("git", "commit", "-m", "Fix bug")
    assert command.display == "git commit -m 'Fix bug'"


def test_resolve_falls_back_to_default() -> None:
    command = make_executor().resolve(ExecutionStep(key="x"))

    assert command.argv == ("git", "checkout", "main")


def test_resolve_optional_without_default_drops_placeholder() -> None:
    command = make_executor().resolve(ExecutionStep(key="b"))

    assert command.argv == ("git", "branch")


def test_resolve_no_argument_command() -> None:
    command = make_executor().resolve(ExecutionStep(key="u"))

    assert command.argv == ("git", "reset", "HEAD^", "--soft")


def test_resolve_no_argument_command_ignores_bound_text() -> None:
    command = make_executor().resolve(ExecutionStep(key="a", argument="file.txt"))

    assert command.argv == ("git", "add", ".")


def test_render_template_no_argument_policy_ignores_argument() -> None:
    spec = CommandSpec("w", "git show {}")

    assert spec.arg_policy is ArgPolicy.NONE
    assert render_template(spec, "HEAD~1") == ("git", "show")


def test_required_argument_missing_runs_nothing() -> None:
    runner = DryRunRunner()
    executor = make_executor(runner)

    with pytest.raises(MissingArgumentError) as info:
        executor.execute(ExecutionStep(key="c"))

    assert info.value.key == "c"
    assert runner.calls == []


def test_execute_echoes_before_running() -> None:
    lines: list[str] = []
    runner = DryRunRunner()
    executor = make_executor(runner, echo=lines.append)

    executor.execute(ExecutionStep(key="a"))

    assert lines == ["→ git add ."]
    assert runner.calls == [("git", "add", ".")]


def test_execute_non_zero_exit_raises() -> None:
    runner = FailingRunner(returncode=128)
    executor = make_executor(runner)

    with pytest.raises(ExecutionFailureError) as info:
        executor.execute(ExecutionStep(key="p"))

    assert info.value.key == "p"
    assert info.value.returncode == 128
    assert info.value.argv == ("git", "push")


def test_render_template_placeholder_inside_token() -> None:
    spec = CommandSpec("t", "git log --author={}", ArgPolicy.OPTIONAL)

    assert render_template(spec, "") == ("git", "log", "--author=")
    assert render_template(spec, "me") == ("git", "log", "--author=me")


def test_subprocess_runner_reports_missing_program() -> None:
    runner = SubprocessRunner()

    assert runner.run(["git-chord-no-such-program"]) == COMMAND_NOT_FOUND


def test_default_runner_reports_with_executor_logger(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    events: list[tuple[str, object]] = []

    def record(name: str, **kwargs: object) -> None:
        events.append((name, kwargs.get("logger_name")))

    monkeypatch.setattr(executor_module.telemetry, "record_event", record)
    executor = StepExecutor(load_default_registry(), logger_name="git_chord.test")

    assert executor.runner.run(["git-chord-no-such-program"]) == COMMAND_NOT_FOUND
    assert events == [("runner.not_found", "git_chord.test")]
