# retrovfs

A small virtual file system layer for Python: file handles with explicit access
modes, directory walking, streams over files and fixed memory buffers, a
pass-through transcoding stream, and byte-order helpers.

## Modules

- `retrovfs.vfs_file` — `VfsFile.open(path, mode, hints)` opens a file with a
  `FileAccess` mode (`READ`, `WRITE`, `READ_WRITE`, optionally combined with
  `UPDATE_EXISTING`) and `AccessHint` hints. A leading `vfsonly://` is stripped
  from the path. The file's size is measured once, at open time, and is returned
  by `size()`. Seeking takes a `SeekPosition` (`START`, `CURRENT`, `END`).
  `error()` reports whether an operation failed. `remove_file` and `rename_file`
  delete and rename files. `VfsFile` is a context manager.
- `retrovfs.vfs_dir` — `stat(path)` returns a pair of `StatFlags` (`VALID`,
  `DIRECTORY`, `CHARACTER_SPECIAL`) and a signed 32-bit size; a missing path gives
  no flags and size 0. `mkdir(path)` creates one directory and raises
  `FileExistsError` if the path exists. `VfsDir.open(name, include_hidden)` lists a
  directory entry by entry with `readdir()`, `name()` and `is_dir()`, or by
  iterating over it to get entry names.
- `retrovfs.file_stream` — `FileStream` sits on top of `VfsFile` and tracks error
  and end-of-file state. It offers `read`, `write`, `seek`, `tell`, `rewind`,
  `getc`, `putc`, `gets`, `getline`, `scanf` (scanf-style parsing that returns the
  converted values as a list) and `printf` (%-style formatting, at most 8191 bytes
  written). Module functions `exists`, `delete`, `rename`, `read_file` and
  `write_file` cover whole-file work. `vfs_init(interface, version)` routes file
  operations through any methods `interface` provides (`open`, `read`, `seek`, …);
  an interface older than version 2, or `None`, restores the built-in behaviour.
- `retrovfs.memory_stream` — `MemoryStream(buffer, writable)` reads and writes a
  fixed, caller-supplied buffer. Reads and writes are clipped at the end of the
  buffer; seeking outside it raises `ValueError`. `close()` and `final_size()` give
  the furthest byte reached for a writable stream, or the buffer size otherwise.
- `retrovfs.interface_stream` — `InterfaceStream` gives one interface over a file
  (`open_file`) or a memory buffer (`open_memory`, `open_writable_memory`), with
  `crc()` computing the CRC-32 of the whole contents. Operations a kind of stream
  does not support (`printf` on memory, `get_ptr` and `eof` on files) raise
  `io.UnsupportedOperation`.
- `retrovfs.trans_stream` — `PipeTransStream` copies input to a bounded output
  buffer; `trans_full(factory, data, output, stream)` runs one flushing step and
  returns a `TransResult` whose `error` is `TransStreamError.BUFFER_FULL` when the
  output is too small. `get_pipe_backend()` returns a factory for pipe streams.
- `retrovfs.endianness` — `swap16`/`swap32`/`swap64`, host/little/big-endian
  conversions, and unaligned loads and stores (`get_unaligned_32be`,
  `set_unaligned_16le`, …) at any offset in a buffer.
- `retrovfs.filters` — `sinc`, `paeth`, `besseli0`, `kaiser_window_function` and
  `lanczos_window_function`.
- `retrovfs.rtime` — `localtime(timestamp)`, a thread-safe wrapper around
  `time.localtime`.

## Installing

```
pip install .
```

## Examples

Writing a file and reading it back:

```python
from retrovfs.file_stream import read_file, write_file

write_file("save.dat", b"hello")
assert read_file("save.dat") == b"hello"
```

Working with a memory-backed interface stream:

```python
from retrovfs.interface_stream import InterfaceStream

buf = bytearray(16)
with InterfaceStream.open_writable_memory(buf) as stream:
    stream.write(b"abc")
    stream.rewind()
    assert stream.read(3) == b"abc"
```

Reading big-endian values out of a buffer:

```python
from retrovfs.endianness import get_unaligned_32be

assert get_unaligned_32be(b"\x00\x12\x34\x56\x78", 1) == 0x12345678
```

## What it does not do

- Files are never memory-mapped; the `FREQUENT_ACCESS` hint is accepted and dropped.
- There are no compressed or disc-image streams: `InterfaceStream` handles only
  files and memory buffers, and `is_compressed()` is always `False`.
- The only transcoding backend is the pass-through pipe; there is no
  deflate/inflate backend.
- Memory streams never grow their buffer and do not read lines (`gets` returns
  `None`).

## Running the tests

```
pip install .[test]
pytest
```