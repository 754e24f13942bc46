"""Errors raised while building tables, tokenizing and running chords."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence


class ChordError(RuntimeError):
    """Base class for failures that abort a chord invocation.

    ``step_index`` is the 1-based position of the failing step once the
    sequencer has seen the error; tokenizer errors leave it unset because no
    step ran.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.step_index: Optional[int] = None


class UnknownCommandError(ChordError):
    """A chord character matches no macro, multi or single key."""

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Unknown command: {char}", key=char)
        self.char = char
        self.position = position


class MissingArgumentError(ChordError):
    """A command that requires an argument received none."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Command '{key}' requires an argument", key=key)


class ExecutionFailureError(ChordError):
    def __init__(self, key: str, returncode: int, argv: Sequence[str] = ()) -> None:
        super().__init__(f"Command failed: {key} (exit {returncode})", key=key)
        self.returncode = returncode
        self.argv = tuple(argv)


class ChordConflictError(ValueError):
    """Raised when a table is built with clashing keys."""

    def __init__(self, table: str, keys: Iterable[str]):
        keys_tuple = tuple(keys)
        super().__init__(f"Duplicate {table} keys: {list(keys_tuple)}")
        self.table = table
        self.keys = keys_tuple


__all__ = [
    "ChordError",
    "UnknownCommandError",
    "MissingArgumentError",
    "ExecutionFailureError",
    "ChordConflictError",
]
