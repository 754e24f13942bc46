"""Vim-style composable git commands typed as short chords."""

__all__ = [
    "adapters",
    "chords",
    "cli",
    "config",
    "runtime",
]

__version__ = "0.1.0"
