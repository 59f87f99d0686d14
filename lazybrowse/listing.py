"""Directory scanning for the entry list.

Builds the ordered listing shown in the left pane: an optional ``..`` row,
then subdirectories, then files, each group sorted case-insensitively.
Scan failures produce an empty listing instead of raising.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

PARENT_ENTRY_NAME = ".."


@dataclass(frozen=True)
class Entry:
    """One row of the entry list."""

    name: str
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_ENTRY_NAME


PARENT_ENTRY = Entry(name=PARENT_ENTRY_NAME, is_dir=True)


def has_parent(directory: Path) -> bool:
    """Return whether ``directory`` has a filesystem parent (false at root)."""
    return directory.parent != directory


def is_hidden_name(name: str) -> bool:
    return name.startswith(".") and name != PARENT_ENTRY_NAME


def _sort_key(entry: Entry) -> str:
    return entry.name.lower()


def list_directory(directory: Path, show_hidden: bool = True) -> tuple[Entry, ...]:
    """List ``directory`` as ``..`` + sorted dirs + sorted files.

    Returns an empty tuple when the directory cannot be scanned. Entries whose
    type cannot be determined are treated as files.
    """
    dirs: list[Entry] = []
    files: list[Entry] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and is_hidden_name(name):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                if is_dir:
                    dirs.append(Entry(name=name, is_dir=True))
                else:
                    files.append(Entry(name=name, is_dir=False))
    except OSError as exc:
        logger.warning("cannot list {}: {}", directory, exc)
        return ()

    dirs.sort(key=_sort_key)
    files.sort(key=_sort_key)

    out: list[Entry] = []
    if has_parent(directory):
        out.append(PARENT_ENTRY)
    out.extend(dirs)
    out.extend(files)
    return tuple(out)


__all__ = [
    "PARENT_ENTRY_NAME",
    "PARENT_ENTRY",
    "Entry",
    "has_parent",
    "is_hidden_name",
    "list_directory",
]
