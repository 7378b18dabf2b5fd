"""Virtual file system helpers: file and directory access, file, memory and
pass-through streams, byte-order helpers and small numeric filters."""

__version__ = "0.1.0"