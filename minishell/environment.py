"""The shell's environment: an ordered list of NAME=value entries."""

from __future__ import annotations

import os
from typing import Iterable, Iterator


class Environment:
    """Ordered environment entries with shell-style lookups."""

    def __init__(self, entries: Iterable[str] = ()):
        self._entries = list(entries)

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> Environment:
        """Build from an envp-style sequence; its first entry is skipped."""
        entries = list(envp)
        return cls(entries[1:])

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _matching_index(self, name: str) -> int | None:
        # An entry matches when its name is a prefix of the requested one.
        for index, entry in enumerate(self._entries):
            key, sep, _ = entry.partition("=")
            if sep and name.startswith(key):
                return index
        return None

    def lookup(self, name: str) -> str | None:
        """Value of the first entry whose name matches, or None."""
        index = self._matching_index(name)
        if index is None:
            return None
        return self._entries[index].partition("=")[2]

    def remove(self, name: str) -> bool:
        """Drop the first matching entry; True if one was removed."""
        index = self._matching_index(name)
        if index is None:
            return False
        del self._entries[index]
        return True

    def unset_command(self, text: str) -> bool:
        """Handle an ``unset NAME`` line; True if an entry was removed."""
        text = text.lstrip(" \t\n\v\f\r")
        if not text.startswith("unset"):
            return False
        return self.remove(text[len("unset"):].lstrip(" \t\n\v\f\r"))

    def as_list(self) -> list[str]:
        """The entries as a new list, in order."""
        return list(self._entries)

    def as_dict(self) -> dict[str, str]:
        """The NAME=value entries as a mapping, for starting programs."""
        result: dict[str, str] = {}
        for entry in self._entries:
            key, sep, value = entry.partition("=")
            if sep:
                result.setdefault(key, value)
        return result

    def _search_path(self) -> list[str] | None:
        for entry in self._entries:
            if entry.startswith("PATH="):
                return [part for part in entry[len("PATH="):].split(":") if part]
        return None

    def resolve_command(self, cmd: str | None) -> str | None:
        """Path of the executable for ``cmd`` or None if none is found.

        Names starting with ``./`` or ``/`` are used as given (and rejected
        if they contain ``..``); others are looked up in PATH.  Without a
        PATH entry nothing is found.
        """
        if cmd is None:
            return None
        directories = self._search_path()
        if directories is None:
            return None
        if cmd.startswith("./") or cmd.startswith("/"):
            if ".." in cmd or not directories:
                return None
            return cmd if os.access(cmd, os.X_OK) else None
        for directory in directories:
            candidate = directory + "/" + cmd
            if os.access(candidate, os.X_OK):
                return candidate
        return None