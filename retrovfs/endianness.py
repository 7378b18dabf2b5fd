"""Byte-order helpers: byte swapping, host/endian conversion and unaligned access."""

from __future__ import annotations

import struct
import sys

_MASK16 = 0xFFFF
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_LITTLE = sys.byteorder == "little"


def swap16(value: int) -> int:
    """Reverse the byte order of an unsigned 16-bit value."""
    value &= _MASK16
    return ((value & 0x00FF) << 8) | ((value & 0xFF00) >> 8)


def swap32(value: int) -> int:
    """Reverse the byte order of an unsigned 32-bit value."""
    value &= _MASK32
    return (
        ((value & 0x000000FF) << 24)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x00FF0000) >> 8)
        | ((value & 0xFF000000) >> 24)
    )


def swap64(value: int) -> int:
    """Reverse the byte order of an unsigned 64-bit value."""
    value &= _MASK64
    return int.from_bytes(value.to_bytes(8, "little"), "big")


def is_little_endian() -> bool:
    """Return True when the host stores integers least significant byte first."""
    return _LITTLE


def _if_big(swap, value: int, mask: int) -> int:
    return value & mask if _LITTLE else swap(value)


def _if_little(swap, value: int, mask: int) -> int:
    return swap(value) if _LITTLE else value & mask


def cpu_to_le16(value: int) -> int:
    """Convert a host 16-bit value to its little-endian representation."""
    return _if_big(swap16, value, _MASK16)


def cpu_to_le32(value: int) -> int:
    """Convert a host 32-bit value to its little-endian representation."""
    return _if_big(swap32, value, _MASK32)


def cpu_to_le64(value: int) -> int:
    """Convert a host 64-bit value to its little-endian representation."""
    return _if_big(swap64, value, _MASK64)


def le_to_cpu16(value: int) -> int:
    """Convert a little-endian 16-bit value to host order."""
    return _if_big(swap16, value, _MASK16)


def le_to_cpu32(value: int) -> int:
    """Convert a little-endian 32-bit value to host order."""
    return _if_big(swap32, value, _MASK32)


def le_to_cpu64(value: int) -> int:
    """Convert a little-endian 64-bit value to host order."""
    return _if_big(swap64, value, _MASK64)


def cpu_to_be16(value: int) -> int:
    """Convert a host 16-bit value to its big-endian representation."""
    return _if_little(swap16, value, _MASK16)


def cpu_to_be32(value: int) -> int:
    """Convert a host 32-bit value to its big-endian representation."""
    return _if_little(swap32, value, _MASK32)


def cpu_to_be64(value: int) -> int:
    """Convert a host 64-bit value to its big-endian representation."""
    return _if_little(swap64, value, _MASK64)


def be_to_cpu16(value: int) -> int:
    """Convert a big-endian 16-bit value to host order."""
    return _if_little(swap16, value, _MASK16)


def be_to_cpu32(value: int) -> int:
    """Convert a big-endian 32-bit value to host order."""
    return _if_little(swap32, value, _MASK32)


def be_to_cpu64(value: int) -> int:
    """Convert a big-endian 64-bit value to host order."""
    return _if_little(swap64, value, _MASK64)


def _check_range(buffer, offset: int, width: int) -> None:
    if offset < 0 or offset + width > len(buffer):
        raise ValueError(
            f"cannot access {width} bytes at offset {offset} "
            f"in a buffer of {len(buffer)} bytes"
        )


def _get(fmt: str, buffer, offset: int) -> int:
    _check_range(buffer, offset, struct.calcsize(fmt))
    return struct.unpack_from(fmt, buffer, offset)[0]


def _set(fmt: str, buffer, offset: int, value: int, mask: int) -> None:
    _check_range(buffer, offset, struct.calcsize(fmt))
    struct.pack_into(fmt, buffer, offset, value & mask)


def get_unaligned_16be(buffer, offset: int = 0) -> int:
    """Read a big-endian unsigned 16-bit value at any offset."""
    return _get(">H", buffer, offset)


def get_unaligned_32be(buffer, offset: int = 0) -> int:
    """Read a big-endian unsigned 32-bit value at any offset."""
    return _get(">I", buffer, offset)


def get_unaligned_64be(buffer, offset: int = 0) -> int:
    """Read a big-endian unsigned 64-bit value at any offset."""
    return _get(">Q", buffer, offset)


def get_unaligned_16le(buffer, offset: int = 0) -> int:
    """Read a little-endian unsigned 16-bit value at any offset."""
    return _get("<H", buffer, offset)


def get_unaligned_32le(buffer, offset: int = 0) -> int:
    """Read a little-endian unsigned 32-bit value at any offset."""
    return _get("<I", buffer, offset)


def get_unaligned_64le(buffer, offset: int = 0) -> int:
    """Read a little-endian unsigned 64-bit value at any offset."""
    return _get("<Q", buffer, offset)


def set_unaligned_16be(buffer, offset: int, value: int) -> None:
    """Store a value as big-endian unsigned 16 bits at any offset."""
    _set(">H", buffer, offset, value, _MASK16)


def set_unaligned_32be(buffer, offset: int, value: int) -> None:
    """Store a value as big-endian unsigned 32 bits at any offset."""
    _set(">I", buffer, offset, value, _MASK32)


def set_unaligned_64be(buffer, offset: int, value: int) -> None:
    """Store a value as big-endian unsigned 64 bits at any offset."""
    _set(">Q", buffer, offset, value, _MASK64)


def set_unaligned_16le(buffer, offset: int, value: int) -> None:
    """Store a value as little-endian unsigned 16 bits at any offset."""
    _set("<H", buffer, offset, value, _MASK16)


def set_unaligned_32le(buffer, offset: int, value: int) -> None:
    """Store a value as little-endian unsigned 32 bits at any offset."""
    _set("<I", buffer, offset, value, _MASK32)


def set_unaligned_64le(buffer, offset: int, value: int) -> None:
    """Store a value as little-endian unsigned 64 bits at any offset."""
    _set("<Q", buffer, offset, value, _MASK64)