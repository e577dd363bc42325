"""A small printf implementation supporting ``c s p d i u x X %``.

Supported flags are ``-`` (left align), ``0`` (zero padding), a field
width, ``.precision`` and ``*`` to take either from the arguments.
Integers behave like C ints: ``d``/``i`` wrap to 32-bit signed values,
``u``/``x``/``X`` to 32-bit unsigned ones. A ``%`` that does not start a
complete specification ends the output at that point.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from icmpping.util.numconv import Prefix, atoi, itoa_base

CONVERSIONS = "cspdiuxX%"
_FLAG_CHARS = "*.-0123456789"
_DECIMAL = "0123456789"
_HEX_LOWER = "0123456789abcdef"
_HEX_UPPER = "0123456789ABCDEF"


@dataclass
class ConversionSpec:
    """One parsed conversion; ``length`` counts the characters it spans, ``%`` included."""

    conversion: str
    length: int
    pad_zero: bool = False
    left_align: bool = False
    width: int = 0
    precision: Optional[int] = None

    @property
    def has_flags(self) -> bool:
        """True when any flag, width or precision changes the plain conversion."""
        return (
            self.precision is not None
            or self.width != 0
            or self.left_align
            or self.pad_zero
        )


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _next_int(args: Iterator[Any]) -> int:
    return int(_next_arg(args))


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _skip_digits(fmt: str, index: int) -> int:
    while fmt[index + 1] in _DECIMAL:
        index += 1
    return index


def _spec_end(fmt: str, start: int) -> Optional[int]:
    """Index of the conversion character of the spec at ``start``, or ``None``."""
    end = start + 1
    while end < len(fmt) and fmt[end] in _FLAG_CHARS:
        end += 1
    if end >= len(fmt) or fmt[end] not in CONVERSIONS:
        return None
    return end


def parse_spec(fmt: str, args: Iterable[Any]) -> ConversionSpec:
    """Parse the specification at the start of ``fmt``.

    ``fmt`` must begin with ``%``. Arguments needed by ``*`` are taken
    from ``args``, which should be an iterator shared with the caller.
    Raises ``ValueError`` when ``fmt`` does not start with a complete
    specification.
    """
    if not fmt.startswith("%"):
        raise ValueError("a conversion specification starts with '%'")
    end = _spec_end(fmt, 0)
    if end is None:
        raise ValueError(f"incomplete conversion specification in {fmt!r}")
    conversion = fmt[end]
    arg_iter = iter(args)
    spec = ConversionSpec(conversion=conversion, length=end + 1)
    index = 1
    while index < end:
        char = fmt[index]
        if char == "0" and conversion in "diuxX%":
            spec.pad_zero = True
        elif char == "-":
            spec.left_align = True
        elif char == "*":
            spec.width = _next_int(arg_iter)
        elif char == "." and conversion in "sdiuxX":
            if fmt[index + 1] == "*":
                spec.precision = _next_int(arg_iter)
                index += 1
            else:
                spec.precision = atoi(fmt[index + 1 :])
                index = _skip_digits(fmt, index)
        elif char in "123456789":
            if fmt[index - 1] != ".":
                spec.width = atoi(fmt[index:])
            index = _skip_digits(fmt, index)
        if spec.width < 0:
            spec.width = -spec.width
            spec.left_align = True
        index += 1
    return spec


def _char_code(value: Any) -> int:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError(f"%c needs a single character, got {value!r}")
        return ord(value) & 0xFF
    return int(value) & 0xFF


def _convert(conversion: str, args: Iterator[Any]) -> str:
    if conversion == "%":
        return "%"
    value = _next_arg(args)
    if conversion == "s":
        if value is None:
            return "(null)"
        if not isinstance(value, str):
            raise TypeError(f"%s needs a string, got {type(value).__name__}")
        return value
    if conversion == "c":
        return chr(_char_code(value))
    if conversion == "p":
        address = 0 if value is None else int(value)
        return itoa_base(address & 0xFFFFFFFFFFFFFFFF, _HEX_LOWER, Prefix.HEX)
    if conversion in "di":
        number = _to_int32(int(value))
        if number < 0:
            return itoa_base(-number, _DECIMAL, Prefix.NEGATIVE)
        return itoa_base(number, _DECIMAL, Prefix.NONE)
    number = int(value) & 0xFFFFFFFF
    digits = {"u": _DECIMAL, "x": _HEX_LOWER, "X": _HEX_UPPER}[conversion]
    return itoa_base(number, digits, Prefix.NONE)


def _apply_precision(text: str, conversion: str, precision: int) -> str:
    if conversion == "s":
        if precision >= 0 and len(text) > precision:
            return text[:precision]
        return text
    sign = "-" if text.startswith("-") else ""
    digits = text[len(sign) :]
    if precision > 0 and len(digits) < precision:
        return sign + digits.rjust(precision, "0")
    return text


def _apply_width(text: str, spec: ConversionSpec) -> str:
    if len(text) >= spec.width:
        return text
    padded = text.rjust(spec.width)
    if spec.left_align:
        padded = padded.lstrip(" ").ljust(spec.width)
    zero_allowed = spec.precision is None or spec.precision < 0
    if spec.pad_zero and zero_allowed and not spec.left_align:
        spaces = len(padded) - len(padded.lstrip(" "))
        padded = "0" * spaces + padded[spaces:]
        if spaces < len(padded) and padded[spaces] == "-":
            padded = padded[:spaces] + "0" + padded[spaces + 1 :]
            padded = "-" + padded[1:]
    return padded


def _render(spec: ConversionSpec, args: Iterator[Any]) -> str:
    text = _convert(spec.conversion, args)
    is_nul = spec.conversion == "c" and text == "\0"
    if is_nul:
        text = ""
    if spec.has_flags:
        if spec.precision == 0 and text == "0":
            text = ""
        if spec.precision is not None:
            text = _apply_precision(text, spec.conversion, spec.precision)
        if spec.width:
            text = _apply_width(text, spec)
    if is_nul:
        body = text[: max(len(text) - 1, 0)]
        return "\0" + body if spec.left_align else body + "\0"
    return text


def format_string(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text."""
    arg_iter = iter(args)
    pieces = []
    index = 0
    while index < len(fmt):
        percent = fmt.find("%", index)
        if percent < 0:
            pieces.append(fmt[index:])
            break
        pieces.append(fmt[index:percent])
        if _spec_end(fmt, percent) is None:
            break
        spec = parse_spec(fmt[percent:], arg_iter)
        pieces.append(_render(spec, arg_iter))
        index = percent + spec.length
    return "".join(pieces)


def printf(fmt: str, *args: Any) -> int:
    """Write the formatted text to standard output and return its length."""
    text = format_string(fmt, *args)
    sys.stdout.write(text)
    sys.stdout.flush()
    return len(text)