"""Side-channel output: the advisory lines printed before commands run."""

from __future__ import annotations

import sys
from typing import Callable

Echo = Callable[[str], None]


def stderr_echo(line: str) -> None:
    print(line, file=sys.stderr, flush=True)


def silent(line: str) -> None:
    del line


__all__ = ["Echo", "stderr_echo", "silent"]
