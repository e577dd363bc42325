"""Conversions between integers and their text forms."""

from __future__ import annotations

from enum import IntEnum

_WHITESPACE = frozenset(chr(code) for code in range(9, 14)) | {" "}
_DECIMAL = "0123456789"


class Prefix(IntEnum):
    """What :func:`itoa_base` puts in front of the digits."""

    NEGATIVE = -1
    NONE = 1
    HEX = 2


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def atoi(text: str) -> int:
    """Parse a leading decimal integer as a 32-bit C int.

    Leading whitespace and one sign are accepted; parsing stops at the
    first non-digit. Values outside the int range wrap around, and text
    with no digits gives 0.
    """
    index = 0
    length = len(text)
    while index < length and text[index] in _WHITESPACE:
        index += 1
    sign = 1
    if index < length and text[index] in "+-":
        if text[index] == "-":
            sign = -1
        index += 1
    value = 0
    while index < length and text[index] in _DECIMAL:
        value = (value * 10 + _DECIMAL.index(text[index])) & 0xFFFFFFFF
        index += 1
    return _to_int32(value * sign)


def itoa(n: int) -> str:
    """Decimal text of ``n`` taken as a 32-bit C int."""
    value = _to_int32(n)
    magnitude = abs(value)
    digits = []
    while True:
        magnitude, rest = divmod(magnitude, 10)
        digits.append(_DECIMAL[rest])
        if magnitude == 0:
            break
    sign = "-" if value < 0 else ""
    return sign + "".join(reversed(digits))


def itoa_base(n: int, digits: str, style: int = Prefix.NONE) -> str:
    """Write the non-negative ``n`` with the given digit alphabet.

    ``style`` selects the prefix: ``Prefix.NEGATIVE`` adds ``-``,
    ``Prefix.HEX`` adds ``0x``, any other value adds nothing.
    """
    if n < 0:
        raise ValueError("itoa_base needs a non-negative number")
    base = len(digits)
    if base < 2:
        raise ValueError("the digit alphabet needs at least two symbols")
    out = []
    while True:
        n, rest = divmod(n, base)
        out.append(digits[rest])
        if n == 0:
            break
    if style == Prefix.NEGATIVE:
        prefix = "-"
    elif style == Prefix.HEX:
        prefix = "0x"
    else:
        prefix = ""
    return prefix + "".join(reversed(out))