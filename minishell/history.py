"""Command history kept in a plain text file."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TextIO

_SPACE = " \t\n\v\f\r"


class History:
    """Append-only history file, one command per line."""

    def __init__(self, path: str | os.PathLike[str] = "history.txt"):
        self.path = Path(path)

    def add(self, line: str) -> None:
        """Append a command line to the file, creating it if needed."""
        with open(self.path, "a", encoding="utf-8") as handle:
            handle.write(line + "\n")

    def _raw_lines(self) -> list[str]:
        with open(self.path, "a+", encoding="utf-8") as handle:
            handle.seek(0)
            return handle.readlines()

    def lines(self) -> list[str]:
        """The stored commands in order, without line endings."""
        return [line.removesuffix("\n") for line in self._raw_lines()]

    def show(self, out: TextIO | None = None) -> None:
        """Write the history numbered from 1."""
        if out is None:
            out = sys.stdout
        for number, line in enumerate(self._raw_lines(), start=1):
            out.write(f"{number} {line}")


def is_history_command(text: str | None) -> bool:
    """True if the line is ``history`` alone, blanks around it allowed."""
    if text is None:
        return False
    text = text.lstrip(_SPACE)
    if text.startswith("history"):
        text = text[len("history"):]
    return not text.lstrip(_SPACE)