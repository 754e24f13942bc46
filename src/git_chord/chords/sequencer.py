"""Drives tokenizer and executor over a whole chord invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from git_chord.runtime import telemetry

from .branch import BranchResolver, BranchSource
from .console import Echo, stderr_echo
from .errors import ChordError
from .executor import CommandRunner, StepExecutor
from .macros import MacroExpander
from .models import ChordInvocation, ExecutionStep, ResolvedCommand
from .registry import ChordRegistry
from .tokenizer import QUOTE, ChordTokenizer, Tokenization

EMPTY_CHORD = "s"


@dataclass(frozen=True, slots=True)
class SequenceResult:
    invocation: ChordInvocation
    steps: tuple[ExecutionStep, ...]
    executed: tuple[ResolvedCommand, ...]


class ChordSequencer:
    """Tokenizes a chord fully, then runs its steps in order.

    The first failing step stops the run; its error carries ``step_index``.
    Steps that already ran are not undone.
    """

    def __init__(
        self,
        registry: ChordRegistry,
        *,
        runner: CommandRunner | None = None,
        branch_source: BranchSource | None = None,
        echo: Echo = stderr_echo,
        empty_chord: str = EMPTY_CHORD,
        quote: str = QUOTE,
        logger_name: str | None = None,
    ) -> None:
        self.registry = registry
        self.branch_source: BranchSource = branch_source or BranchResolver(
            logger_name=logger_name
        )
        self.expander = MacroExpander(registry, echo=echo, logger_name=logger_name)
        self.tokenizer = ChordTokenizer(
            registry, self.expander, quote=quote, logger_name=logger_name
        )
        self.executor = StepExecutor(
            registry, runner, echo=echo, logger_name=logger_name
        )
        self.empty_chord = empty_chord
        self._logger_name = logger_name

    @property
    def quote(self) -> str:
        return self.tokenizer.quote

    def capture(
        self, chord: str, positional_args: Sequence[str] = ()
    ) -> ChordInvocation:
        """Freeze one invocation, reading the branch now if a macro needs it."""

        chord = chord or self.empty_chord
        branch = ""
        if self.tokenizer.needs_branch(chord):
            branch = self.branch_source.current_branch()
        return ChordInvocation.build(chord, positional_args, branch=branch)

    def invoke(self, chord: str, positional_args: Sequence[str] = ()) -> SequenceResult:
        return self.run(self.capture(chord, positional_args))

    def scan(self, invocation: ChordInvocation) -> Tokenization:
        return self.tokenizer.scan(
            invocation.chord,
            invocation.positional_args,
            branch=invocation.branch,
        )

    def plan(
        self, chord: str, positional_args: Sequence[str] = ()
    ) -> tuple[ResolvedCommand, ...]:
        """Resolve every step of ``chord`` without running anything."""

        invocation = self.capture(chord, positional_args)
        steps = self.scan(invocation).steps
        resolved: list[ResolvedCommand] = []
        for index, step in enumerate(steps, start=1):
            try:
                resolved.append(self.executor.resolve(step))
            except ChordError as exc:
                exc.step_index = index
                raise
        return tuple(resolved)

    def run(self, invocation: ChordInvocation) -> SequenceResult:
        with telemetry.span(
            "chords::run",
            logger_name=self._logger_name,
            component="chords",
            metadata={"chord": invocation.chord},
        ) as handle:
            steps = self.scan(invocation).steps
            handle.add_metadata("steps", len(steps))
            executed: list[ResolvedCommand] = []
            for index, step in enumerate(steps, start=1):
                try:
                    executed.append(self.executor.execute(step))
                except ChordError as exc:
                    exc.step_index = index
                    telemetry.record_event(
                        "chord.step_failed",
                        level="warning",
                        data={"key": step.key, "index": index, "error": str(exc)},
                        logger_name=self._logger_name,
                    )
                    raise
            return SequenceResult(
                invocation=invocation, steps=steps, executed=tuple(executed)
            )


__all__ = ["ChordSequencer", "SequenceResult", "EMPTY_CHORD"]
