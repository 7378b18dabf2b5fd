"""Low-level file handles with the access modes and seek origins of the VFS layer."""

from __future__ import annotations

import enum
import os
from typing import BinaryIO, Optional

_FRONTEND_PREFIX = "vfsonly://"


class FileAccess(enum.IntFlag):
    """How a file is opened."""

    READ = 1 << 0
    WRITE = 1 << 1
    READ_WRITE = READ | WRITE
    UPDATE_EXISTING = 1 << 2


class AccessHint(enum.IntFlag):
    """Advice about how a file will be used."""

    NONE = 0
    FREQUENT_ACCESS = 1 << 0


class SeekPosition(enum.IntEnum):
    """Origin of a seek."""

    START = 0
    CURRENT = 1
    END = 2


_WHENCE = {
    SeekPosition.START: os.SEEK_SET,
    SeekPosition.CURRENT: os.SEEK_CUR,
    SeekPosition.END: os.SEEK_END,
}

_MODES = {
    FileAccess.READ: "rb",
    FileAccess.WRITE: "wb",
    FileAccess.READ_WRITE: "w+b",
    FileAccess.WRITE | FileAccess.UPDATE_EXISTING: "r+b",
    FileAccess.READ_WRITE | FileAccess.UPDATE_EXISTING: "r+b",
}


def _mode_string(mode: int) -> str:
    try:
        return _MODES[FileAccess(mode)]
    except (KeyError, ValueError):
        raise ValueError(f"unsupported file access mode: {mode!r}") from None


class VfsFile:
    """An open file. Its size is measured once, when it is opened."""

    def __init__(self, handle: BinaryIO, path: str, hints: AccessHint) -> None:
        self._fp: Optional[BinaryIO] = handle
        self._path = path
        self.hints = hints
        self._error = False
        self._fp.seek(0, os.SEEK_END)
        self._size = self._fp.tell()
        self._fp.seek(0, os.SEEK_SET)

    @classmethod
    def open(
        cls,
        path: str,
        mode: int = FileAccess.READ,
        hints: int = AccessHint.NONE,
    ) -> "VfsFile":
        """Open ``path``; raise ValueError for a bad mode and OSError on failure."""
        path = os.fspath(path)
        if path.startswith(_FRONTEND_PREFIX):
            path = path[len(_FRONTEND_PREFIX):]
        mode_str = _mode_string(mode)
        # Memory-mapped access is not used, so the frequent-access hint is dropped.
        effective_hints = AccessHint(hints) & ~AccessHint.FREQUENT_ACCESS
        handle = open(path, mode_str)
        try:
            return cls(handle, path, effective_hints)
        except BaseException:
            handle.close()
            raise

    def _handle(self) -> BinaryIO:
        if self._fp is None:
            raise ValueError("I/O operation on closed file")
        return self._fp

    def _run(self, operation, *args):
        try:
            return operation(*args)
        except OSError:
            self._error = True
            raise

    @property
    def closed(self) -> bool:
        return self._fp is None

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._fp is not None:
            fp, self._fp = self._fp, None
            fp.close()

    def error(self) -> bool:
        """Return True if an earlier operation on this file failed."""
        return self._error

    def size(self) -> int:
        """Size of the file as measured when it was opened."""
        return self._size

    def truncate(self, length: int) -> None:
        """Cut or extend the file to ``length`` bytes."""
        fp = self._handle()
        self._run(fp.flush)
        self._run(os.ftruncate, fp.fileno(), length)

    def tell(self) -> int:
        """Return the current position."""
        return self._run(self._handle().tell)

    def seek(self, offset: int, position: int = SeekPosition.START) -> int:
        """Move the position relative to ``position``; return the new position."""
        fp = self._handle()
        try:
            whence = _WHENCE[SeekPosition(position)]
        except ValueError:
            raise ValueError(f"invalid seek position: {position!r}") from None
        return self._run(fp.seek, offset, whence)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""
        if size < 0:
            raise ValueError("read size must not be negative")
        return self._run(self._handle().read, size)

    def write(self, data) -> int:
        """Write ``data``; return the number of bytes written."""
        return self._run(self._handle().write, data)

    def flush(self) -> None:
        """Flush buffered writes to the operating system."""
        self._run(self._handle().flush)

    def path(self) -> str:
        """The path the file was opened with, without any frontend prefix."""
        return self._path

    def __enter__(self) -> "VfsFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def remove_file(path: str) -> None:
    """Delete a file; raise ValueError for an empty path, OSError on failure."""
    if not path:
        raise ValueError("path must not be empty")
    os.remove(path)


def rename_file(old_path: str, new_path: str) -> None:
    """Rename a file; raise ValueError for empty paths, OSError on failure."""
    if not old_path or not new_path:
        raise ValueError("paths must not be empty")
    os.rename(old_path, new_path)