"""Chord tables, tokenizer, executor and sequencer."""

from .branch import BranchResolver, BranchSource, FixedBranch
from .errors import (
    ChordConflictError,
    ChordError,
    ExecutionFailureError,
    MissingArgumentError,
    UnknownCommandError,
)
from .executor import CommandRunner, DryRunRunner, StepExecutor, SubprocessRunner
from .macros import MacroExpander
from .models import (
    ArgPolicy,
    ChordInvocation,
    CommandSpec,
    ExecutionStep,
    MacroSpec,
    MacroStep,
    MultiCommandSpec,
    ResolvedCommand,
)
from .registry import ChordRegistry, RegistryStats
from .tokenizer import ChordTokenizer, Tokenization
from .sequencer import ChordSequencer, SequenceResult
from .defaults import load_default_registry
from .reference import render_reference

__all__ = [
    "ArgPolicy",
    "CommandSpec",
    "MultiCommandSpec",
    "MacroSpec",
    "MacroStep",
    "ExecutionStep",
    "ChordInvocation",
    "ResolvedCommand",
    "ChordRegistry",
    "RegistryStats",
    "ChordConflictError",
    "ChordError",
    "UnknownCommandError",
    "MissingArgumentError",
    "ExecutionFailureError",
    "BranchResolver",
    "BranchSource",
    "FixedBranch",
    "MacroExpander",
    "ChordTokenizer",
    "Tokenization",
    "CommandRunner",
    "SubprocessRunner",
    "DryRunRunner",
    "StepExecutor",
    "ChordSequencer",
    "SequenceResult",
    "load_default_registry",
    "render_reference",
]
