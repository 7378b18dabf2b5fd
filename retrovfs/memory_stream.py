"""A seekable stream over a fixed-size, caller-supplied memory buffer."""

from __future__ import annotations

import os

EOF = -1


class MemoryStream:
    """Read and write a fixed buffer without ever growing it.

    Reads and writes are clipped at the end of the buffer. The stream tracks
    the furthest position reached, which is the final size of a writable
    stream once it is closed.
    """

    def __init__(self, buffer, writable: bool = False) -> None:
        view = memoryview(buffer).cast("B")
        if len(view) == 0:
            raise ValueError("a memory stream needs a non-empty buffer")
        self._buf = view
        self._size = len(view)
        self._ptr = 0
        self._max_ptr = 0
        self.writable = bool(writable)
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed memory stream")

    def _advance(self, count: int) -> None:
        self._ptr += count
        if self._ptr > self._max_ptr:
            self._max_ptr = self._ptr

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes from the current position."""
        self._check_open()
        count = max(0, min(size, self._size - self._ptr))
        data = bytes(self._buf[self._ptr:self._ptr + count])
        self._advance(count)
        return data

    def write(self, data) -> int:
        """Write as much of ``data`` as fits; return the number of bytes written."""
        self._check_open()
        chunk = memoryview(data).cast("B")
        count = min(len(chunk), self._size - self._ptr)
        self._buf[self._ptr:self._ptr + count] = chunk[:count]
        self._advance(count)
        return count

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position; raise ValueError if it would leave the buffer."""
        self._check_open()
        if whence == os.SEEK_SET:
            target = offset
        elif whence == os.SEEK_CUR:
            target = self._ptr + offset
        elif whence == os.SEEK_END:
            end = self._max_ptr if self.writable else self._size
            target = end + offset
        else:
            raise ValueError(f"invalid whence: {whence}")
        if target < 0 or target > self._size:
            raise ValueError(f"seek position {target} outside buffer of {self._size} bytes")
        self._ptr = target
        return target

    def rewind(self) -> None:
        """Return to the start of the buffer."""
        self.seek(0, os.SEEK_SET)

    def tell(self) -> int:
        """Return the current position."""
        return self._ptr

    def getc(self) -> int:
        """Read one byte as an int, or return EOF (-1) at the end."""
        self._check_open()
        if self._ptr >= self._size:
            return EOF
        value = self._buf[self._ptr]
        self._advance(1)
        return value

    def putc(self, char: int) -> None:
        """Store one byte if there is room; do nothing at the end of the buffer."""
        self._check_open()
        if self._ptr < self._size:
            self._buf[self._ptr] = char & 0xFF
            self._advance(1)

    def gets(self, size: int):
        """Memory streams do not read lines; always returns None."""
        self._check_open()
        return None

    def close(self) -> int:
        """Close the stream and return its final size."""
        self.closed = True
        return self.final_size()

    def final_size(self) -> int:
        """Bytes reached for a writable stream, otherwise the buffer size."""
        return self._max_ptr if self.writable else self._size