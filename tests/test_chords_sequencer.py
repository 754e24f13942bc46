from __future__ import annotations

from typing import Sequence

import pytest

from git_chord.chords import (
    ChordSequencer,
    ExecutionFailureError,
    FixedBranch,
    MissingArgumentError,
    UnknownCommandError,
    load_default_registry,
)


class RecordingRunner:
    """Records argv; fails on the given 1-based call numbers."""

    def __init__(self, fail_on: Sequence[int] = ()) -> None:
        self.fail_on = set(fail_on)
        self.calls: list[str] = []

    def run(self, argv: Sequence[str]) -> int:
        self.calls.append(" ".join(argv))
        return 1 if len(self.calls) in self.fail_on else 0


class CountingBranch(FixedBranch):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.reads = 0

    def current_branch(self) -> str:
        self.reads += 1
        return super().current_branch()


def make_sequencer(
    runner: RecordingRunner, *, branch: str = "feature-branch"
) -> ChordSequencer:
    return ChordSequencer(
        load_default_registry(),
        runner=runner,
        branch_source=FixedBranch(branch),
        echo=lambda line: None,
    )


def test_empty_chord_runs_status() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("")

    assert runner.calls == ["git status"]


def test_single_add() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("a")

    assert runner.calls == ["git add ."]


def test_commit_with_positional_message() -> None:
    runner = RecordingRunner()

    result = make_sequencer(runner).invoke("c", ["Fix bug"])

    assert [command.argv for command in result.executed] == [
        ("git", "commit", "-m", "Fix bug")
    ]


def test_add_commit_push_chain() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("acp", ["Feature complete"])

    assert runner.calls == [
        "git add .",
        "git commit -m Feature complete",
        "git push",
    ]


def test_inline_quoted_chain() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke('x"develop"ac"message"p')

    assert runner.calls == [
        "git checkout develop",
        "git add .",
        "git commit -m message",
        "git push",
    ]


def test_quoted_text_after_no_argument_key_is_dropped() -> None:
    runner = RecordingRunner()

    result = make_sequencer(runner).invoke('a"x"p')

    assert runner.calls == ["git add .", "git push"]
    assert result.steps[0].argument == "x"


def test_checkout_defaults_to_main() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("x")

    assert runner.calls == ["git checkout main"]


def test_stash_checkout_pull_pop_chain() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("hxFH")

    assert runner.calls == [
        "git stash",
        "git checkout main",
        "git pull",
        "git stash pop",
    ]


def test_unknown_command_runs_nothing() -> None:
    runner = RecordingRunner()

    with pytest.raises(UnknownCommandError) as info:
        make_sequencer(runner).invoke("az")

    assert info.value.char == "z"
    assert info.value.step_index is None
    assert runner.calls == []


def test_missing_argument_stops_before_later_steps() -> None:
    runner = RecordingRunner()

    with pytest.raises(MissingArgumentError) as info:
        make_sequencer(runner).invoke("acp")

    assert info.value.step_index == 2
    assert runner.calls == ["git add ."]


def test_failure_stops_chain() -> None:
    runner = RecordingRunner(fail_on=(1,))

    with pytest.raises(ExecutionFailureError) as info:
        make_sequencer(runner).invoke("acp", ["test"])

    assert info.value.key == "a"
    assert runner.calls == ["git add ."]


def test_macro_failure_at_second_sub_step_skips_rest() -> None:
    runner = RecordingRunner(fail_on=(2,))

    with pytest.raises(ExecutionFailureError) as info:
        make_sequencer(runner, branch="my-feature").invoke("R")

    assert info.value.key == "F"
    assert info.value.step_index == 2
    assert runner.calls == ["git checkout main", "git pull"]


def test_sync_rebase_macro() -> None:
    runner = RecordingRunner()

    make_sequencer(runner, branch="my-feature").invoke("R")

    assert runner.calls == [
        "git checkout main",
        "git pull",
        "git checkout my-feature",
        "git rebase main",
    ]


def test_sync_merge_macro() -> None:
    runner = RecordingRunner()

    make_sequencer(runner, branch="develop").invoke("M")

    assert runner.calls == [
        "git checkout main",
        "git pull",
        "git checkout develop",
        "git merge main",
    ]


def test_wrap_up_macro() -> None:
    runner = RecordingRunner()

    make_sequencer(runner).invoke("W")

    assert runner.calls == ["git push", "git checkout main"]


def test_branch_is_read_once_before_any_step() -> None:
    runner = RecordingRunner()
    branch = CountingBranch("original-branch")
    sequencer = ChordSequencer(
        load_default_registry(),
        runner=runner,
        branch_source=branch,
        echo=lambda line: None,
    )

    sequencer.invoke('x"other"RW')

    assert branch.reads == 1
    assert runner.calls[0] == "git checkout other"
    assert runner.calls[3] == "git checkout original-branch"


def test_branch_not_read_without_macro() -> None:
    branch = CountingBranch("ignored")
    sequencer = ChordSequencer(
        load_default_registry(),
        runner=RecordingRunner(),
        branch_source=branch,
        echo=lambda line: None,
    )

    invocation = sequencer.capture("acp", ["msg"])

    assert branch.reads == 0
    assert invocation.branch == ""
    assert invocation.positional_args == ("msg",)


def test_macro_letter_inside_quotes_does_not_read_branch() -> None:
    branch = CountingBranch("ignored")
    runner = RecordingRunner()
    sequencer = ChordSequencer(
        load_default_registry(),
        runner=runner,
        branch_source=branch,
        echo=lambda line: None,
    )

    sequencer.invoke('c"Fix README"')

    assert branch.reads == 0
    assert runner.calls == ["git commit -m Fix README"]


def test_empty_chord_and_quote_are_configurable() -> None:
    runner = RecordingRunner()
    sequencer = ChordSequencer(
        load_default_registry(),
        runner=runner,
        branch_source=FixedBranch("feature"),
        echo=lambda line: None,
        empty_chord="l",
        quote="'",
    )

    sequencer.invoke("")
    sequencer.invoke("c'msg'")

    assert sequencer.empty_chord == "l"
    assert sequencer.quote == "'"
    assert runner.calls == ["git log --oneline -20", "git commit -m msg"]


def test_plan_resolves_without_running() -> None:
    runner = RecordingRunner()

    commands = make_sequencer(runner).plan("ac", ["Done"])

    assert [command.display for command in commands] == [
        "git add .",
        "git commit -m Done",
    ]
    assert runner.calls == []


def test_echo_lines_precede_each_command() -> None:
    lines: list[str] = []
    sequencer = ChordSequencer(
        load_default_registry(),
        runner=RecordingRunner(),
        branch_source=FixedBranch("topic"),
        echo=lines.append,
    )

    sequencer.invoke("W")

    assert lines == [
        "⚡ Macro W → expanding for branch 'topic'",
        "→ git push",
        "→ git checkout main",
    ]
