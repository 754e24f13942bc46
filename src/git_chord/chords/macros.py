"""Macro expansion with the branch captured at chord start."""

from __future__ import annotations

from git_chord.runtime import telemetry

from .console import Echo, stderr_echo
from .models import BRANCH_PLACEHOLDER, ExecutionStep
from .registry import ChordRegistry


class MacroExpander:
    def __init__(
        self,
        registry: ChordRegistry,
        *,
        echo: Echo = stderr_echo,
        logger_name: str | None = None,
    ) -> None:
        self._registry = registry
        self._echo = echo
        self._logger_name = logger_name

    def expand(self, macro_key: str, captured_branch: str) -> tuple[ExecutionStep, ...]:
        """Turn ``macro_key`` into its steps, filling ``{branch}``.

        ``captured_branch`` is whatever the invocation read before any step
        ran; it is never re-read here.
        """

        macro = self._registry.lookup_macro(macro_key)
        if macro is None:
            raise KeyError(f"Macro '{macro_key}' is not registered")

        self._echo(f"⚡ Macro {macro_key} → expanding for branch '{captured_branch}'")
        telemetry.record_event(
            "macro.expand",
            data={"macro": macro_key, "branch": captured_branch},
            logger_name=self._logger_name,
        )
        return tuple(
            ExecutionStep(
                key=step.key,
                argument=step.argument.replace(BRANCH_PLACEHOLDER, captured_branch),
                origin=macro_key,
            )
            for step in macro.steps
        )


__all__ = ["MacroExpander"]
