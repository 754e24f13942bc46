"""Read-only tables mapping chord keys to commands and macros."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, TypeVar

from git_chord.runtime.telemetry import span

from .errors import ChordConflictError
from .models import CommandSpec, MacroSpec, MultiCommandSpec

E = TypeVar("E", CommandSpec, MultiCommandSpec, MacroSpec)


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry contents."""

    command_count: int
    multi_count: int
    macro_count: int


def _index(table: str, entries: Iterable[E], *, replace: bool) -> Dict[str, E]:
    indexed: Dict[str, E] = {}
    duplicates: list[str] = []
    for entry in entries:
        if entry.key in indexed and not replace:
            duplicates.append(entry.key)
        indexed[entry.key] = entry
    if duplicates:
        raise ChordConflictError(table, duplicates)
    return indexed


class ChordRegistry:
    """Owns the single, multi and macro tables used by one process.

    Tables are frozen at construction. :meth:`extend` is the only way to add
    entries and it returns a new registry.
    """

    def __init__(
        self,
        commands: Iterable[CommandSpec] = (),
        multi: Iterable[MultiCommandSpec] = (),
        macros: Iterable[MacroSpec] = (),
        *,
        replace: bool = False,
        logger_name: str | None = None,
    ) -> None:
        self._logger_name = logger_name
        with span(
            "chords::build_registry",
            logger_name=logger_name,
            component="chords",
        ) as handle:
            self._commands: Mapping[str, CommandSpec] = MappingProxyType(
                _index("command", commands, replace=replace)
            )
            self._multi: Mapping[str, MultiCommandSpec] = MappingProxyType(
                _index("multi", multi, replace=replace)
            )
            self._macros: Mapping[str, MacroSpec] = MappingProxyType(
                _index("macro", macros, replace=replace)
            )
            self._check_macro_steps()
            stats = self.stats()
            handle.add_metadata("commands", stats.command_count)
            handle.add_metadata("multi", stats.multi_count)
            handle.add_metadata("macros", stats.macro_count)

    def lookup(self, key: str) -> Optional[CommandSpec]:
        return self._commands.get(key)

    def lookup_multi(self, key: str) -> Optional[MultiCommandSpec]:
        return self._multi.get(key)

    def lookup_macro(self, key: str) -> Optional[MacroSpec]:
        return self._macros.get(key)

    def is_known(self, key: str) -> bool:
        return key in self._commands or key in self._multi

    def iter_commands(self) -> Iterator[CommandSpec]:
        yield from self._commands.values()

    def iter_multi(self) -> Iterator[MultiCommandSpec]:
        yield from self._multi.values()

    def iter_macros(self) -> Iterator[MacroSpec]:
        yield from self._macros.values()

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            multi_count=len(self._multi),
            macro_count=len(self._macros),
        )

    def extend(
        self,
        *,
        commands: Iterable[CommandSpec] = (),
        multi: Iterable[MultiCommandSpec] = (),
        macros: Iterable[MacroSpec] = (),
        replace: bool = False,
    ) -> "ChordRegistry":
        """Return a new registry holding these tables plus the given entries.

        Without ``replace`` a key already present raises
        :class:`ChordConflictError`; with it the new entry wins.
        """

        return ChordRegistry(
            (*self._commands.values(), *commands),
            (*self._multi.values(), *multi),
            (*self._macros.values(), *macros),
            replace=replace,
            logger_name=self._logger_name,
        )

    def _check_macro_steps(self) -> None:
        for macro in self._macros.values():
            unknown = [step.key for step in macro.steps if not self.is_known(step.key)]
            if unknown:
                raise ValueError(
                    f"Macro '{macro.key}' references unknown commands {unknown}"
                )


__all__ = [
    "ChordRegistry",
    "RegistryStats",
]
