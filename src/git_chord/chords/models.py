"""Dataclasses describing chord tables and the steps derived from a chord."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

PLACEHOLDER = "{}"
BRANCH_PLACEHOLDER = "{branch}"
MACRO_DELIMITER = ":"


class ArgPolicy(str, Enum):
    """How a single-character command binds its argument."""

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"

    @property
    def accepts_argument(self) -> bool:
        return self is not ArgPolicy.NONE


def _split_command(text: str) -> tuple[str, ...]:
    tokens = tuple(shlex.split(text))
    if not tokens:
        raise ValueError("command line cannot be empty")
    return tokens


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Single-character command backed by a one-placeholder template."""

    key: str
    template: str
    arg_policy: ArgPolicy = ArgPolicy.NONE
    default: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.key) != 1:
            raise ValueError(f"command key must be one character, got {self.key!r}")
        object.__setattr__(self, "arg_policy", ArgPolicy(self.arg_policy))
        template = self.template.strip()
        count = template.count(PLACEHOLDER)
        if count == 0 and self.arg_policy is ArgPolicy.NONE:
            template = f"{template} {PLACEHOLDER}"
            count = 1
        if count != 1:
            raise ValueError(
                f"template for '{self.key}' needs exactly one {PLACEHOLDER}, "
                f"found {count}"
            )
        if self.default is not None and self.arg_policy is not ArgPolicy.OPTIONAL:
            raise ValueError(f"only optional commands take a default ('{self.key}')")
        object.__setattr__(self, "template", template)
        _split_command(template)

    @property
    def argv_template(self) -> tuple[str, ...]:
        return _split_command(self.template)

    @property
    def usage(self) -> str:
        """Template with the placeholder shown the way help text reads."""

        if self.arg_policy is ArgPolicy.REQUIRED:
            shown = "<arg>"
        elif self.arg_policy is ArgPolicy.OPTIONAL:
            shown = f"[{self.default}]" if self.default else "[arg]"
        else:
            shown = ""
        tokens = (token.replace(PLACEHOLDER, shown) for token in self.argv_template)
        return " ".join(token for token in tokens if token)


@dataclass(frozen=True, slots=True)
class MultiCommandSpec:
    """Two-character key mapped to a literal command line."""

    key: str
    command: str
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.key) != 2:
            raise ValueError(f"multi key must be two characters, got {self.key!r}")
        if PLACEHOLDER in self.command:
            raise ValueError(f"multi command '{self.key}' cannot take an argument")
        _split_command(self.command)

    @property
    def argv(self) -> tuple[str, ...]:
        return _split_command(self.command)


@dataclass(frozen=True, slots=True)
class MacroStep:
    key: str
    argument: str = ""


@dataclass(frozen=True, slots=True)
class MacroSpec:
    """One key expanding to a fixed run of other keys."""

    key: str
    steps: tuple[MacroStep, ...]
    description: str = ""

    def __post_init__(self) -> None:
        if len(self.key) != 1:
            raise ValueError(f"macro key must be one character, got {self.key!r}")
        if not self.steps:
            raise ValueError(f"macro '{self.key}' needs at least one step")

    @classmethod
    def parse(cls, key: str, text: str, *, description: str = "") -> "MacroSpec":
        """Build a macro from ``"x:F:x {branch}:r"`` style text.

        Each part is split at its first space. When there is no space the
        argument comes out equal to the key and is dropped.
        """

        steps: list[MacroStep] = []
        for part in text.split(MACRO_DELIMITER):
            if not part:
                continue
            step_key = part.split(" ", 1)[0]
            argument = part.split(" ", 1)[-1]
            if argument == step_key:
                argument = ""
            steps.append(MacroStep(step_key, argument))
        return cls(key=key, steps=tuple(steps), description=description)

    @property
    def serialized(self) -> str:
        return MACRO_DELIMITER.join(
            f"{step.key} {step.argument}" if step.argument else step.key
            for step in self.steps
        )


@dataclass(frozen=True, slots=True)
class ExecutionStep:
    """A resolved key plus its bound argument, ready for the executor."""

    key: str
    argument: str = ""
    origin: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ChordInvocation:
    """One user call: the chord, its positional args and the captured branch."""

    chord: str
    positional_args: tuple[str, ...] = ()
    branch: str = ""

    @classmethod
    def build(
        cls, chord: str, positional_args: Iterable[str] = (), *, branch: str = ""
    ) -> "ChordInvocation":
        return cls(chord=chord, positional_args=tuple(positional_args), branch=branch)


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    """Literal argument vector produced for one step."""

    key: str
    argv: tuple[str, ...]

    @property
    def display(self) -> str:
        return shlex.join(self.argv)


__all__ = [
    "ArgPolicy",
    "CommandSpec",
    "MultiCommandSpec",
    "MacroStep",
    "MacroSpec",
    "ExecutionStep",
    "ChordInvocation",
    "ResolvedCommand",
    "PLACEHOLDER",
    "BRANCH_PLACEHOLDER",
]
