import io

import pytest

from retrovfs import file_stream
from retrovfs.file_stream import EOF, FileStream
from retrovfs.vfs_file import FileAccess, SeekPosition


@pytest.fixture(autouse=True)
def _reset_vfs():
    file_stream.vfs_init(None, 0)
    yield
    file_stream.vfs_init(None, 0)


def make(tmp_path, content: bytes, name="data.bin"):
    path = tmp_path / name
    path.write_bytes(content)
    return str(path)


def test_read_whole_file_and_size(tmp_path):
    path = make(tmp_path, b"hello world")
    with FileStream.open(path) as stream:
        assert stream.get_size() == len(b"hello world")
        assert stream.read(11) == b"hello world"
        assert stream.eof() is False


def test_open_missing_raises(tmp_path):
    with pytest.raises(OSError):
        FileStream.open(str(tmp_path / "missing"))


def test_short_read_sets_eof_and_seek_clears_it(tmp_path):
    path = make(tmp_path, b"abc")
    with FileStream.open(path) as stream:
        assert stream.read(10) == b"abc"
        assert stream.eof() is True
        stream.seek(1, SeekPosition.START)
        assert stream.eof() is False
        assert stream.read(2) == b"bc"


def test_rewind_returns_to_start(tmp_path):
    path = make(tmp_path, b"xyz")
    with FileStream.open(path) as stream:
        stream.read(5)
        stream.rewind()
        assert stream.tell() == 0
        assert stream.eof() is False
        assert stream.read(1) == b"x"


def test_gets_stops_after_newline_and_returns_none_at_end(tmp_path):
    path = make(tmp_path, b"ab\ncd")
    with FileStream.open(path) as stream:
        assert stream.gets(10) == b"ab\n"
        assert stream.gets(10) == b"cd"
        assert stream.gets(10) is None


def test_gets_respects_size(tmp_path):
    path = make(tmp_path, b"abcdef")
    with FileStream.open(path) as stream:
        assert stream.gets(3) == b"ab"
        assert stream.tell() == 2


def test_getc_and_eof(tmp_path):
    path = make(tmp_path, b"a")
    with FileStream.open(path) as stream:
        assert stream.getc() == ord("a")
        assert stream.getc() == EOF
        assert stream.eof() is True


def test_getline(tmp_path):
    path = make(tmp_path, b"line1\nline2")
    with FileStream.open(path) as stream:
        assert stream.getline() == b"line1"
        assert stream.getline() == b"line2"
        assert stream.getline() == b""


def test_scanf_int_and_string_leaves_position(tmp_path):
    path = make(tmp_path, b"42 hello rest")
    with FileStream.open(path) as stream:
        assert stream.scanf("%d %s") == [42, "hello"]
        assert stream.tell() == len("42 hello")
        assert stream.read(5) == b" rest"


def test_scanf_hex_float_and_suppression(tmp_path):
    path = make(tmp_path, b"0x1f 3.5 7 8")
    with FileStream.open(path) as stream:
        assert stream.scanf("%x %f %*d %d") == [0x1F, 3.5, 8]


def test_scanf_stops_at_literal_mismatch(tmp_path):
    path = make(tmp_path, b"1;2")
    with FileStream.open(path) as stream:
        assert stream.scanf("%d,%d") == [1]
        assert stream.tell() == 1


def test_scanf_scanset_and_chars(tmp_path):
    path = make(tmp_path, b"abc123def")
    with FileStream.open(path) as stream:
        assert stream.scanf("%[a-z]") == ["abc"]
        assert stream.scanf("%2c") == ["12"]
        assert stream.tell() == 5


def test_scanf_empty_file_raises_eof(tmp_path):
    path = make(tmp_path, b"")
    with FileStream.open(path) as stream:
        with pytest.raises(EOFError):
            stream.scanf("%d")


def test_printf_putc_write_round_trip(tmp_path):
    path = str(tmp_path / "out.txt")
    with FileStream.open(path, FileAccess.WRITE) as stream:
        assert stream.printf("%d-%s", 5, "x") == len("5-x")
        assert stream.printf("") == 0
        assert stream.putc(ord("!")) == ord("!")
        assert stream.write(b"end") == 3
    assert file_stream.read_file(path) == b"5-x!end"


def test_truncate_writable(tmp_path):
    path = str(tmp_path / "t.bin")
    with FileStream.open(path, FileAccess.READ_WRITE) as stream:
        stream.write(b"abcdef")
        stream.flush()
        stream.truncate(2)
        assert stream.error() is False
    assert file_stream.read_file(path) == b"ab"


def test_failed_operation_sets_error_flag(tmp_path):
    path = make(tmp_path, b"data")
    with FileStream.open(path) as stream:
        assert stream.error() is False
        with pytest.raises(OSError):
            stream.truncate(1)
        assert stream.error() is True
        stream.rewind()
        assert stream.error() is False


def test_path_strips_frontend_prefix(tmp_path):
    path = make(tmp_path, b"p")
    with FileStream.open("vfsonly://" + path) as stream:
        assert stream.path() == path


def test_exists(tmp_path):
    path = make(tmp_path, b"e")
    assert file_stream.exists(path) is True
    assert file_stream.exists(str(tmp_path / "nope")) is False
    assert file_stream.exists("") is False


def test_delete_and_rename(tmp_path):
    path = make(tmp_path, b"content")
    new_path = str(tmp_path / "renamed.bin")
    file_stream.rename(path, new_path)
    assert file_stream.exists(path) is False
    assert file_stream.read_file(new_path) == b"content"
    file_stream.delete(new_path)
    assert file_stream.exists(new_path) is False


def test_read_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        file_stream.read_file(str(tmp_path / "missing"))


def test_write_file_round_trip(tmp_path):
    path = str(tmp_path / "w.bin")
    file_stream.write_file(path, b"\x00\x01\x02")
    assert file_stream.read_file(path) == b"\x00\x01\x02"


def test_closed_stream_rejects_reads(tmp_path):
    path = make(tmp_path, b"abc")
    with FileStream.open(path) as stream:
        pass
    assert stream.closed is True
    with pytest.raises(ValueError):
        stream.read(1)


class _MemoryInterface:
    def __init__(self):
        self.opened = []

    def open(self, path, mode, hints):
        self.opened.append(path)
        if path == "none":
            return None
        return io.BytesIO(b"virtual")

    def close(self, handle):
        handle.close()

    def size(self, handle):
        return len(handle.getvalue())

    def read(self, handle, size):
        return handle.read(size)

    def tell(self, handle):
        return handle.tell()

    def seek(self, handle, offset, position):
        return handle.seek(offset, int(position))


def test_custom_interface_is_used():
    iface = _MemoryInterface()
    file_stream.vfs_init(iface, file_stream.FILESTREAM_REQUIRED_VFS_VERSION)
    with FileStream.open("anything") as stream:
        assert stream.get_size() == len(b"virtual")
        assert stream.read(100) == b"virtual"
        assert stream.eof() is True
    assert iface.opened == ["anything"]


def test_custom_interface_open_returning_none_raises():
    file_stream.vfs_init(_MemoryInterface(), file_stream.FILESTREAM_REQUIRED_VFS_VERSION)
    with pytest.raises(OSError):
        FileStream.open("none")


def test_old_interface_version_is_ignored(tmp_path):
    iface = _MemoryInterface()
    file_stream.vfs_init(iface, file_stream.FILESTREAM_REQUIRED_VFS_VERSION - 1)
    with pytest.raises(OSError):
        FileStream.open(str(tmp_path / "missing"))
    assert iface.opened == []