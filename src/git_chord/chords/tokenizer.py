"""Longest-match-first scanner turning a chord string into execution steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from git_chord.runtime.telemetry import record_event, span

from .errors import UnknownCommandError
from .macros import MacroExpander
from .models import ExecutionStep
from .registry import ChordRegistry

QUOTE = '"'


@dataclass(frozen=True, slots=True)
class Tokenization:
    """Outcome of scanning one chord."""

    steps: tuple[ExecutionStep, ...]
    consumed_args: int = 0
    unused_args: tuple[str, ...] = ()
    unterminated_quote: bool = False


class ChordTokenizer:
    """Walks a chord left to right with a fixed priority at each position.

    1. macro key (expanded in place)
    2. two-character multi key
    3. single-character key, followed by an optional inline quoted argument
    """

    def __init__(
        self,
        registry: ChordRegistry,
        expander: MacroExpander,
        *,
        quote: str = QUOTE,
        logger_name: str | None = None,
    ) -> None:
        if len(quote) != 1:
            raise ValueError("quote delimiter must be a single character")
        self._registry = registry
        self._expander = expander
        self._quote = quote
        self._logger_name = logger_name

    @property
    def quote(self) -> str:
        return self._quote

    def needs_branch(self, chord: str) -> bool:
        """Whether scanning ``chord`` would expand a macro.

        Walks with the same priority as :meth:`scan` so characters inside
        inline quotes never count. Stops at the first unknown character,
        where scanning fails before any later macro is reached.
        """

        i = 0
        while i < len(chord):
            char = chord[i]
            if self._registry.lookup_macro(char) is not None:
                return True
            pair = chord[i : i + 2]
            if len(pair) == 2 and self._registry.lookup_multi(pair) is not None:
                i += 2
                continue
            if self._registry.lookup(char) is None:
                return False
            i += 1
            if i < len(chord) and chord[i] == self._quote:
                end = chord.find(self._quote, i + 1)
                if end == -1:
                    return False
                i = end + 1
        return False

    def tokenize(
        self,
        chord: str,
        positional_args: Sequence[str] = (),
        *,
        branch: Optional[str] = None,
    ) -> tuple[ExecutionStep, ...]:
        return self.scan(chord, positional_args, branch=branch).steps

    def scan(
        self,
        chord: str,
        positional_args: Sequence[str] = (),
        *,
        branch: Optional[str] = None,
    ) -> Tokenization:
        args = tuple(positional_args)
        with span(
            "chords::tokenize",
            logger_name=self._logger_name,
            component="chords",
            metadata={"chord": chord, "args": len(args)},
        ) as handle:
            steps: list[ExecutionStep] = []
            unterminated = False
            next_arg = 0
            i = 0
            while i < len(chord):
                char = chord[i]

                if self._registry.lookup_macro(char) is not None:
                    if branch is None:
                        raise ValueError(
                            f"Macro '{char}' needs the branch captured at chord start"
                        )
                    steps.extend(self._expander.expand(char, branch))
                    i += 1
                    continue

                pair = chord[i : i + 2]
                if len(pair) == 2 and self._registry.lookup_multi(pair) is not None:
                    steps.append(ExecutionStep(key=pair))
                    i += 2
                    continue

                spec = self._registry.lookup(char)
                if spec is None:
                    handle.add_metadata("unknown", char)
                    raise UnknownCommandError(char, i)
                i += 1

                if i < len(chord) and chord[i] == self._quote:
                    end = chord.find(self._quote, i + 1)
                    if end == -1:
                        unterminated = True
                        end = len(chord)
                    steps.append(ExecutionStep(key=char, argument=chord[i + 1 : end]))
                    i = end + 1
                elif spec.arg_policy.accepts_argument and next_arg < len(args):
                    steps.append(ExecutionStep(key=char, argument=args[next_arg]))
                    next_arg += 1
                else:
                    steps.append(ExecutionStep(key=char))

            result = Tokenization(
                steps=tuple(steps),
                consumed_args=next_arg,
                unused_args=args[next_arg:],
                unterminated_quote=unterminated,
            )
            handle.add_metadata("steps", len(result.steps))
            self._report(chord, result)
            return result

    def _report(self, chord: str, result: Tokenization) -> None:
        if result.unterminated_quote:
            record_event(
                "chord.unterminated_quote",
                level="warning",
                data={"chord": chord},
                logger_name=self._logger_name,
            )
        if result.unused_args:
            record_event(
                "chord.unused_args",
                level="warning",
                data={"chord": chord, "unused": list(result.unused_args)},
                logger_name=self._logger_name,
            )


__all__ = ["ChordTokenizer", "Tokenization", "QUOTE"]
