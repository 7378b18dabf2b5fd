"""Directory access for the VFS layer: stat, mkdir and directory listing."""

from __future__ import annotations

import enum
import os
import stat as _stat
from typing import Iterator, Optional, Tuple

_DIR_MODE = 0o750


class StatFlags(enum.IntFlag):
    """What a stat call found out about a path."""

    VALID = 1 << 0
    DIRECTORY = 1 << 1
    CHARACTER_SPECIAL = 1 << 2


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def stat(path: str) -> Tuple[StatFlags, int]:
    """Return the flags and size of ``path``.

    An empty or missing path gives no flags and a size of 0. The size is
    reported as a signed 32-bit value.
    """
    if not path:
        return StatFlags(0), 0
    try:
        info = os.stat(path)
    except OSError:
        return StatFlags(0), 0
    flags = StatFlags.VALID
    if _stat.S_ISDIR(info.st_mode):
        flags |= StatFlags.DIRECTORY
    if _stat.S_ISCHR(info.st_mode):
        flags |= StatFlags.CHARACTER_SPECIAL
    return flags, _to_int32(info.st_size)


def mkdir(path: str) -> None:
    """Create one directory.

    Raises FileExistsError if something already exists at ``path`` and
    OSError for any other failure.
    """
    os.mkdir(path, _DIR_MODE)


class VfsDir:
    """An open directory whose entries are read one at a time."""

    def __init__(self, name: str, include_hidden: bool) -> None:
        self._path = name
        # Entries are never filtered; the flag is kept for callers that ask.
        self.include_hidden = bool(include_hidden)
        self._iter: Optional[Iterator[os.DirEntry]] = os.scandir(name)
        self._entry: Optional[os.DirEntry] = None

    @classmethod
    def open(cls, name: str, include_hidden: bool = False) -> "VfsDir":
        """Open directory ``name``; raise ValueError if empty, OSError on failure."""
        name = os.fspath(name)
        if not name:
            raise ValueError("directory name must not be empty")
        return cls(name, include_hidden)

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._iter is None

    def readdir(self) -> bool:
        """Advance to the next entry; return False when there are no more."""
        if self._iter is None:
            raise ValueError("I/O operation on closed directory")
        self._entry = next(self._iter, None)
        return self._entry is not None

    def name(self) -> Optional[str]:
        """Name of the current entry, or None before the first or after the last."""
        return self._entry.name if self._entry is not None else None

    def is_dir(self) -> bool:
        """True if the current entry is a directory, following symbolic links."""
        if self._entry is None:
            return False
        try:
            return self._entry.is_dir()
        except OSError:
            return False

    def close(self) -> None:
        """Release the directory; closing twice is harmless."""
        if self._iter is not None:
            it, self._iter = self._iter, None
            it.close()
        self._entry = None

    def __iter__(self) -> Iterator[str]:
        while self.readdir():
            yield self.name()

    def __enter__(self) -> "VfsDir":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()