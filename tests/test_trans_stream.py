from retrovfs.trans_stream import (
    PipeTransStream,
    TransStreamError,
    get_pipe_backend,
    trans_full,
)


def test_pipe_copies_everything_when_room():
    stream = PipeTransStream()
    out = bytearray(10)
    stream.set_input(b"hello")
    stream.set_output(out)
    result = stream.trans(True)
    assert result.ok
    assert result.read == result.written == 5
    assert result.error is TransStreamError.NONE
    assert bytes(out[:5]) == b"hello"


def test_pipe_buffer_full_then_continue():
    stream = PipeTransStream()
    first = bytearray(3)
    stream.set_input(b"abcdef")
    stream.set_output(first)
    result = stream.trans(True)
    assert not result.ok
    assert result.error is TransStreamError.BUFFER_FULL
    assert result.read == 3
    assert bytes(first) == b"abc"

    second = bytearray(3)
    stream.set_output(second)
    result = stream.trans(True)
    assert result.ok
    assert bytes(second) == b"def"


def test_backend_name_and_factory():
    backend = get_pipe_backend()
    assert backend.name == "pipe"
    assert isinstance(backend(), PipeTransStream)


def test_trans_full_round_trip():
    data = bytes(range(50))
    out = bytearray(len(data))
    result = trans_full(get_pipe_backend(), data, out)
    assert result.ok
    assert bytes(out) == data


def test_trans_full_reuses_stream():
    stream = PipeTransStream()
    out = bytearray(2)
    result = trans_full(get_pipe_backend(), b"xyz", out, stream)
    assert result.error is TransStreamError.BUFFER_FULL
    assert bytes(out) == b"xy"


def test_trans_full_allocation_failure():
    result = trans_full(lambda: None, b"a", bytearray(1))
    assert result.error is TransStreamError.ALLOCATION_FAILURE
    assert not result.ok