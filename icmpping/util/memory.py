"""Byte-buffer helpers with the semantics of the classic memory routines.

Buffers that are written to must be mutable (``bytearray`` or a writable
``memoryview``). Functions that the C library lets return a pointer
into a buffer return an index here, or ``None`` where C returns NULL.
A byte count larger than a buffer raises ``ValueError`` instead of
running past its end.
"""

from __future__ import annotations

from typing import Optional, Union

Buffer = Union[bytes, bytearray, memoryview]
MutableBuffer = Union[bytearray, memoryview]


def _check_count(n: int, *buffers: Buffer) -> None:
    if n < 0:
        raise ValueError("byte count must not be negative")
    for buf in buffers:
        if n > len(buf):
            raise ValueError(f"{n} bytes requested from a buffer of {len(buf)}")


def memset(buf: MutableBuffer, value: int, n: int) -> MutableBuffer:
    """Fill the first ``n`` bytes of ``buf`` with ``value`` (taken modulo 256)."""
    _check_count(n, buf)
    buf[:n] = bytes([value & 0xFF]) * n
    return buf


def bzero(buf: MutableBuffer, n: int) -> None:
    """Set the first ``n`` bytes of ``buf`` to zero."""
    memset(buf, 0, n)


def calloc(count: int, size: int) -> bytearray:
    """A zero-filled buffer of ``count * size`` bytes.

    A zero count or size still gives a one-byte buffer.
    """
    if count < 0 or size < 0:
        raise ValueError("count and size must not be negative")
    if count == 0 or size == 0:
        return bytearray(1)
    return bytearray(count * size)


def memcpy(dest: MutableBuffer, src: Buffer, n: int) -> MutableBuffer:
    """Copy ``n`` bytes from ``src`` to the start of ``dest``."""
    _check_count(n, dest, src)
    if dest is src:
        return dest
    dest[:n] = bytes(src[:n])
    return dest


def memccpy(dest: MutableBuffer, src: Buffer, c: int, n: int) -> Optional[int]:
    """Copy bytes from ``src`` to ``dest`` up to and including the first ``c``.

    At most ``n`` bytes are copied. Returns the index in ``dest`` just
    past the copied ``c``, or ``None`` when ``c`` is not among the first
    ``n`` bytes (in which case all ``n`` were copied).
    """
    _check_count(n, src)
    data = bytes(src[:n])
    found = data.find(c & 0xFF)
    chunk = data if found < 0 else data[: found + 1]
    _check_count(len(chunk), dest)
    dest[: len(chunk)] = chunk
    return None if found < 0 else found + 1


def memmove(buf: MutableBuffer, dst: int, src: int, n: int) -> MutableBuffer:
    """Move ``n`` bytes inside ``buf`` from offset ``src`` to offset ``dst``.

    Overlapping regions are handled: the result is as if the source
    bytes were first copied aside.
    """
    if dst < 0 or src < 0:
        raise ValueError("offsets must not be negative")
    if n < 0:
        raise ValueError("byte count must not be negative")
    if dst + n > len(buf) or src + n > len(buf):
        raise ValueError("move runs past the end of the buffer")
    buf[dst : dst + n] = bytes(buf[src : src + n])
    return buf


def memchr(buf: Buffer, c: int, n: int) -> Optional[int]:
    """Index of the first byte equal to ``c`` among the first ``n``, or ``None``."""
    _check_count(n, buf)
    found = bytes(buf[:n]).find(c & 0xFF)
    return None if found < 0 else found


def memcmp(a: Buffer, b: Buffer, n: int) -> int:
    """Difference of the first differing bytes within ``n``; zero if none differ."""
    if n <= 0:
        return 0
    _check_count(n, a, b)
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return x - y
    return 0