"""Transcoding streams that move data from an input to an output buffer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional


class TransStreamError(enum.IntEnum):
    NONE = 0
    AGAIN = 1
    ALLOCATION_FAILURE = 2
    INVALID = 3
    BUFFER_FULL = 4
    OTHER = 5


@dataclass(frozen=True)
class TransResult:
    """Outcome of one transcoding step."""

    ok: bool
    read: int
    written: int
    error: TransStreamError


class PipeTransStream:
    """A pass-through transcoder: copies input to output unchanged."""

    def __init__(self) -> None:
        self._in = memoryview(b"")
        self._out = memoryview(bytearray())

    def set_input(self, data) -> None:
        """Set the bytes to be consumed."""
        self._in = memoryview(data).cast("B")

    def set_output(self, buffer) -> None:
        """Set the writable buffer that receives the output."""
        self._out = memoryview(buffer).cast("B")

    def trans(self, flush: bool = True) -> TransResult:
        """Copy as much input as fits into the output."""
        in_size = len(self._in)
        out_size = len(self._out)
        if out_size < in_size:
            count = out_size
            error = TransStreamError.BUFFER_FULL
        else:
            count = in_size
            error = TransStreamError.NONE
        self._out[:count] = self._in[:count]
        self._in = self._in[count:]
        self._out = self._out[count:]
        return TransResult(error is TransStreamError.NONE, count, count, error)


@dataclass(frozen=True)
class _Backend:
    name: str
    stream_new: Callable[[], object]

    def __call__(self):
        return self.stream_new()


_PIPE_BACKEND = _Backend("pipe", PipeTransStream)


def get_pipe_backend() -> _Backend:
    """Return the pass-through backend; calling it creates a new stream."""
    return _PIPE_BACKEND


def trans_full(factory, data, output, stream: Optional[object] = None) -> TransResult:
    """Transcode all of ``data`` into ``output`` in a single flushing step.

    ``stream`` is reused when given; otherwise ``factory`` creates one.
    """
    if stream is None:
        stream = factory()
        if stream is None:
            return TransResult(False, 0, 0, TransStreamError.ALLOCATION_FAILURE)
    stream.set_input(data)
    stream.set_output(output)
    return stream.trans(True)