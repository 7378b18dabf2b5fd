"""Small numeric filters used by resamplers and image decoders."""

from __future__ import annotations

import math
import struct


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def sinc(value: float) -> float:
    """Unnormalised sinc: sin(x)/x, with 1.0 near zero."""
    if abs(value) < 0.00001:
        return 1.0
    return math.sin(value) / value


def paeth(a: int, b: int, c: int) -> int:
    """Paeth prediction: pick the neighbour closest to a + b - c."""
    p = a + b - c
    pa = abs(p - a)
    pb = abs(p - b)
    pc = abs(p - c)
    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def besseli0(x: float) -> float:
    """Approximate the modified Bessel function I0 with 18 series terms."""
    total = 0.0
    factorial = 1.0
    factorial_mult = 0.0
    x_pow = 1.0
    two_div_pow = 1.0
    x_sqr = x * x
    for _ in range(18):
        total += x_pow * two_div_pow / (factorial * factorial)
        factorial_mult += 1.0
        x_pow *= x_sqr
        two_div_pow *= 0.25
        factorial *= factorial_mult
    return total


def kaiser_window_function(index: float, beta: float) -> float:
    """Kaiser window at ``index`` in [-1, 1]; NaN outside that range."""
    arg = _to_float32(1 - index * index)
    root = _to_float32(math.sqrt(arg)) if arg >= 0 else math.nan
    return besseli0(beta * root)


def lanczos_window_function(index: float) -> float:
    """Lanczos window: sinc(pi * index)."""
    return sinc(math.pi * index)