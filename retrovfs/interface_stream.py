"""One stream interface over files and in-memory buffers."""

from __future__ import annotations

import enum
import io
import os
import zlib
from typing import Optional, Union

from .file_stream import FileStream
from .memory_stream import MemoryStream
from .vfs_file import AccessHint, FileAccess, SeekPosition

_CRC_CHUNK = 4096

_FILE_SEEK = {
    os.SEEK_SET: SeekPosition.START,
    os.SEEK_CUR: SeekPosition.CURRENT,
    os.SEEK_END: SeekPosition.END,
}


class StreamType(enum.Enum):
    """The kind of storage behind an interface stream."""

    FILE = "file"
    MEMORY = "memory"


class InterfaceStream:
    """A stream that reads and writes either a file or a memory buffer."""

    def __init__(
        self,
        kind: StreamType,
        backend: Union[FileStream, MemoryStream],
        data=None,
    ) -> None:
        self.type = kind
        self._backend: Union[FileStream, MemoryStream] = backend
        self._data = data
        self.closed = False

    @classmethod
    def open_file(
        cls,
        path: str,
        mode: int = FileAccess.READ,
        hints: int = AccessHint.NONE,
    ) -> "InterfaceStream":
        """Open a file; raise OSError if it cannot be opened."""
        return cls(StreamType.FILE, FileStream.open(path, mode, hints))

    @classmethod
    def open_memory(cls, data) -> "InterfaceStream":
        """Open a stream over ``data``; its final size is the buffer size."""
        return cls(StreamType.MEMORY, MemoryStream(data, False), data)

    @classmethod
    def open_writable_memory(cls, data) -> "InterfaceStream":
        """Open a stream over ``data``; its final size is the furthest byte reached."""
        return cls(StreamType.MEMORY, MemoryStream(data, True), data)

    @property
    def _file(self) -> FileStream:
        return self._backend  # type: ignore[return-value]

    @property
    def _memory(self) -> MemoryStream:
        return self._backend  # type: ignore[return-value]

    def _unsupported(self, what: str) -> io.UnsupportedOperation:
        return io.UnsupportedOperation(f"{what} is not supported by {self.type.value} streams")

    def size(self) -> int:
        """Size of the file, or of the memory buffer."""
        if self.type is StreamType.FILE:
            return self._file.get_size()
        return len(memoryview(self._data).cast("B"))

    def resize(self, data) -> None:
        """Replace the buffer of a memory stream; files are left unchanged."""
        if self.type is StreamType.FILE:
            return
        writable = self._memory.writable
        self._backend = MemoryStream(data, writable)
        self._data = data

    def flush(self) -> None:
        """Flush pending writes of a file; memory streams need none."""
        if self.type is StreamType.FILE:
            self._file.flush()

    def close(self) -> None:
        """Close the stream; closing twice is harmless."""
        if self.closed:
            return
        self.closed = True
        self._backend.close()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position relative to ``whence``; return the new position."""
        if self.type is StreamType.FILE:
            try:
                position = _FILE_SEEK[whence]
            except KeyError:
                raise ValueError(f"invalid whence: {whence}") from None
            return self._file.seek(offset, position)
        return self._memory.seek(offset, whence)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""
        return self._backend.read(size)

    def write(self, data) -> int:
        """Write ``data``; return the number of bytes written."""
        return self._backend.write(data)

    def printf(self, fmt, *args) -> int:
        """Format and write text to a file stream."""
        if self.type is not StreamType.FILE:
            raise self._unsupported("printf")
        return self._file.printf(fmt, *args)

    def get_ptr(self) -> int:
        """Current position inside a memory buffer."""
        if self.type is not StreamType.MEMORY:
            raise self._unsupported("get_ptr")
        return self._memory.tell()

    def gets(self, size: int) -> Optional[bytes]:
        """Read a line of at most ``size - 1`` bytes; memory streams give None."""
        return self._backend.gets(size)

    def getc(self) -> int:
        """Read one byte as an int, or -1 at the end."""
        return self._backend.getc()

    def tell(self) -> int:
        """Return the current position."""
        return self._backend.tell()

    def eof(self) -> bool:
        """True once a file read came up short."""
        if self.type is not StreamType.FILE:
            raise self._unsupported("eof")
        return self._file.eof()

    def rewind(self) -> None:
        """Go back to the start of the stream."""
        self._backend.rewind()

    def putc(self, char: int) -> None:
        """Write one byte."""
        self._backend.putc(char)

    def is_compressed(self) -> bool:
        """Files and memory buffers are never compressed."""
        return False

    def crc(self) -> int:
        """CRC-32 of the whole stream; the stream is rewound before and after."""
        self.rewind()
        accumulator = 0
        while True:
            chunk = self.read(_CRC_CHUNK)
            if not chunk:
                break
            accumulator = zlib.crc32(chunk, accumulator)
        self.rewind()
        return accumulator

    def __enter__(self) -> "InterfaceStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()