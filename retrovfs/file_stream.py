"""Buffered file streams with error/EOF tracking and a replaceable VFS backend."""

from __future__ import annotations

import os
import re
from typing import Any, Callable, Dict, List, Optional, Union

from .vfs_file import (
    AccessHint,
    FileAccess,
    SeekPosition,
    VfsFile,
    remove_file,
    rename_file,
)

EOF = -1
FILESTREAM_REQUIRED_VFS_VERSION = 2
_SCANF_CHUNK = 4095
_PRINTF_LIMIT = 8 * 1024 - 1

_CALLBACK_NAMES = (
    "get_path",
    "open",
    "close",
    "size",
    "truncate",
    "tell",
    "seek",
    "read",
    "write",
    "flush",
    "remove",
    "rename",
)

_DEFAULTS: Dict[str, Callable[..., Any]] = {
    "get_path": lambda handle: handle.path(),
    "open": VfsFile.open,
    "close": lambda handle: handle.close(),
    "size": lambda handle: handle.size(),
    "truncate": lambda handle, length: handle.truncate(length),
    "tell": lambda handle: handle.tell(),
    "seek": lambda handle, offset, position: handle.seek(offset, position),
    "read": lambda handle, size: handle.read(size),
    "write": lambda handle, data: handle.write(data),
    "flush": lambda handle: handle.flush(),
    "remove": remove_file,
    "rename": rename_file,
}

_callbacks: Dict[str, Callable[..., Any]] = dict(_DEFAULTS)


def vfs_init(interface: Any, version: int) -> None:
    """Route file operations through ``interface``.

    Every method the interface provides (``open``, ``read``, ``seek`` ...)
    replaces the built-in one; the others keep the built-in behaviour.
    An interface that is missing or older than the required version is
    ignored and the built-in implementation is used throughout.
    """
    _callbacks.clear()
    _callbacks.update(_DEFAULTS)
    if interface is None or version < FILESTREAM_REQUIRED_VFS_VERSION:
        return
    for name in _CALLBACK_NAMES:
        method = getattr(interface, name, None)
        if callable(method):
            _callbacks[name] = method


class FileStream:
    """An open file that remembers whether it hit an error or end of file."""

    def __init__(self, handle: Any) -> None:
        self._handle = handle
        self._error = False
        self._eof = False
        self.closed = False

    @classmethod
    def open(
        cls,
        path: str,
        mode: int = FileAccess.READ,
        hints: int = AccessHint.NONE,
    ) -> "FileStream":
        """Open ``path``; raise OSError if it cannot be opened."""
        handle = _callbacks["open"](os.fspath(path), mode, hints)
        if handle is None:
            raise OSError(f"cannot open {path!r}")
        return cls(handle)

    def _call(self, name: str, *args):
        try:
            return _callbacks[name](self._handle, *args)
        except OSError:
            self._error = True
            raise

    def close(self) -> None:
        """Close the underlying file."""
        _callbacks["close"](self._handle)
        self.closed = True

    def get_size(self) -> int:
        """Size of the file in bytes."""
        return self._call("size")

    def truncate(self, length: int) -> None:
        """Cut or extend the file to ``length`` bytes."""
        self._call("truncate", length)

    def gets(self, size: int) -> Optional[bytes]:
        """Read at most ``size - 1`` bytes, stopping after a newline.

        Returns None when nothing could be read because the file is at its end.
        """
        out = bytearray()
        c = 0
        for _ in range(size - 1):
            c = self.getc()
            if c == EOF:
                break
            out.append(c)
            if c == 0x0A:
                break
        if not out and c == EOF:
            return None
        return bytes(out)

    def getc(self) -> int:
        """Read one byte as an int, or return EOF (-1)."""
        data = self.read(1)
        return data[0] if len(data) == 1 else EOF

    def getline(self) -> bytes:
        """Read up to the next newline, which is consumed but not returned."""
        out = bytearray()
        c = self.getc()
        while c != EOF and c != 0x0A:
            out.append(c)
            c = self.getc()
        return bytes(out)

    def scanf(self, fmt: str) -> List[Union[int, float, str]]:
        """Parse the text at the current position with a scanf-style format.

        Returns the converted values in order; parsing stops at the first
        directive that does not match. The position is left just after the
        consumed text. Raises EOFError if there is no input to parse.
        """
        start = self.tell()
        raw = self.read(_SCANF_CHUNK)
        if not raw:
            raise EOFError("no input to scan")
        text = raw.decode("latin-1")
        values, consumed, hit_eof = _scan(text, fmt)
        self.seek(start + consumed, SeekPosition.START)
        if hit_eof and not values:
            raise EOFError("input ended before the first conversion")
        return values

    def seek(self, offset: int, position: int = SeekPosition.START) -> int:
        """Move the position and clear the end-of-file flag."""
        try:
            return self._call("seek", offset, position)
        finally:
            self._eof = False

    def tell(self) -> int:
        """Return the current position."""
        return self._call("tell")

    def eof(self) -> bool:
        """True once a read returned fewer bytes than asked for."""
        return self._eof

    def rewind(self) -> None:
        """Go back to the start and clear the error and end-of-file flags."""
        self.seek(0, SeekPosition.START)
        self._error = False
        self._eof = False

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""
        data = self._call("read", size)
        if len(data) < size:
            self._eof = True
        return data

    def write(self, data) -> int:
        """Write ``data``; return the number of bytes written."""
        return self._call("write", data)

    def putc(self, char: int) -> int:
        """Write one byte; return it, or EOF if it could not be written."""
        written = self.write(bytes([char & 0xFF]))
        return char & 0xFF if written == 1 else EOF

    def printf(self, fmt, *args) -> int:
        """Format with %-style formatting and write the result (at most 8191 bytes)."""
        if isinstance(fmt, (bytes, bytearray)):
            data = bytes(fmt) % args if args else bytes(fmt)
        else:
            data = (fmt % args if args else fmt).encode("utf-8")
        data = data[:_PRINTF_LIMIT]
        if not data:
            return 0
        return self.write(data)

    def flush(self) -> None:
        """Flush buffered writes."""
        self._call("flush")

    def error(self) -> bool:
        """True if an operation on this stream failed."""
        return self._error

    def path(self) -> str:
        """The path the stream was opened with."""
        return _callbacks["get_path"](self._handle)

    def __enter__(self) -> "FileStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.closed:
            self.close()


def exists(path: str) -> bool:
    """True if ``path`` can be opened for reading."""
    if not path:
        return False
    try:
        stream = FileStream.open(path, FileAccess.READ, AccessHint.NONE)
    except OSError:
        return False
    stream.close()
    return True


def delete(path: str) -> None:
    """Delete a file."""
    _callbacks["remove"](path)


def rename(old_path: str, new_path: str) -> None:
    """Rename a file."""
    _callbacks["rename"](old_path, new_path)


def read_file(path: str) -> bytes:
    """Return the whole contents of ``path``; raise OSError on failure."""
    with FileStream.open(path, FileAccess.READ, AccessHint.NONE) as stream:
        size = stream.get_size()
        if size < 0:
            raise OSError(f"cannot determine the size of {path!r}")
        return stream.read(size)


def write_file(path: str, data) -> None:
    """Replace the contents of ``path`` with ``data``; raise OSError on a short write."""
    payload = bytes(data)
    with FileStream.open(path, FileAccess.WRITE, AccessHint.NONE) as stream:
        written = stream.write(payload)
    if written != len(payload):
        raise OSError(f"short write to {path!r}: {written} of {len(payload)} bytes")


_INT_PATTERNS = {
    "d": re.compile(r"[+-]?\d+"),
    "u": re.compile(r"[+-]?\d+"),
    "i": re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9]\d*)"),
    "o": re.compile(r"[+-]?[0-7]+"),
    "x": re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+"),
    "X": re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+"),
}
_INT_BASES = {"d": 10, "u": 10, "o": 8, "x": 16, "X": 16}
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_FLOAT_SPECS = set("feEgGaA")


def _parse_auto_int(token: str) -> int:
    sign = -1 if token.startswith("-") else 1
    digits = token.lstrip("+-")
    if digits[:2].lower() == "0x":
        return sign * int(digits[2:], 16)
    if len(digits) > 1 and digits.startswith("0"):
        return sign * int(digits, 8)
    return sign * int(digits, 10)


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _scanset_matcher(spec: str) -> Callable[[str], bool]:
    negate = spec.startswith("^")
    if negate:
        spec = spec[1:]
    singles = set()
    ranges = []
    i = 0
    while i < len(spec):
        if i + 2 < len(spec) and spec[i + 1] == "-":
            ranges.append((spec[i], spec[i + 2]))
            i += 3
        else:
            singles.add(spec[i])
            i += 1

    def matches(ch: str) -> bool:
        found = ch in singles or any(lo <= ch <= hi for lo, hi in ranges)
        return found != negate

    return matches


def _scan(text: str, fmt: str):
    """Return (values, characters consumed, whether input ran out)."""
    values: List[Union[int, float, str]] = []
    pos = 0
    i = 0
    while i < len(fmt):
        ch = fmt[i]
        if ch.isspace():
            pos = _skip_space(text, pos)
            i += 1
            continue
        if ch != "%":
            if pos >= len(text) or text[pos] != ch:
                break
            pos += 1
            i += 1
            continue

        i += 1
        suppress = i < len(fmt) and fmt[i] == "*"
        if suppress:
            i += 1
        width_start = i
        while i < len(fmt) and fmt[i].isdigit():
            i += 1
        width = int(fmt[width_start:i]) if i > width_start else None
        if i < len(fmt) and fmt[i] in "hl":
            if i + 1 < len(fmt) and fmt[i + 1] == fmt[i]:
                i += 1
            i += 1
        elif i < len(fmt) and fmt[i] in "jztL":
            i += 1
        if i >= len(fmt):
            raise ValueError("incomplete conversion in format")
        spec = fmt[i]
        i += 1

        if spec == "%":
            pos = _skip_space(text, pos)
            if pos >= len(text):
                return values, pos, True
            if text[pos] != "%":
                break
            pos += 1
            continue

        if spec == "[":
            close = fmt.find("]", i + 1 if fmt[i:i + 1] == "]" or fmt[i:i + 2] == "^]" else i)
            if fmt[i:i + 2] == "^]":
                close = fmt.find("]", i + 2)
            if close < 0:
                raise ValueError("unterminated scanset in format")
            matcher = _scanset_matcher(fmt[i:close])
            i = close + 1
            if pos >= len(text):
                return values, pos, True
            limit = len(text) if width is None else min(len(text), pos + width)
            end = pos
            while end < limit and matcher(text[end]):
                end += 1
            if end == pos:
                break
            token = text[pos:end]
            pos = end
            if not suppress:
                values.append(token)
            continue

        if spec == "c":
            count = 1 if width is None else width
            if pos >= len(text):
                return values, pos, True
            if pos + count > len(text):
                break
            token = text[pos:pos + count]
            pos += count
            if not suppress:
                values.append(token)
            continue

        pos = _skip_space(text, pos)
        if pos >= len(text):
            return values, pos, True
        window = text[pos:] if width is None else text[pos:pos + width]

        if spec == "s":
            end = 0
            while end < len(window) and not window[end].isspace():
                end += 1
            token = window[:end]
            pos += end
            if not suppress:
                values.append(token)
            continue

        if spec in _INT_PATTERNS:
            match = _INT_PATTERNS[spec].match(window)
            if not match:
                break
            token = match.group(0)
            pos += len(token)
            if not suppress:
                if spec == "i":
                    values.append(_parse_auto_int(token))
                else:
                    values.append(int(token, _INT_BASES[spec]))
            continue

        if spec in _FLOAT_SPECS:
            match = _FLOAT_PATTERN.match(window)
            if not match:
                break
            token = match.group(0)
            pos += len(token)
            if not suppress:
                values.append(float(token))
            continue

        raise ValueError(f"unsupported conversion: %{spec}")

    return values, pos, False