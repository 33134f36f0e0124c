"""
scanf-style reading of raw option values.

An option's scan format decides how its raw command-line text is read
back as a typed value.  Two formats are handled literally: "%s" returns
the raw text untouched and "%b" reads a boolean.  Every other format is
interpreted the way C's sscanf() would, and a scan only succeeds if it
assigns exactly one value.
"""

from __future__ import annotations

import re

from typing import Any
from typing import Callable
from typing import NamedTuple

from shortopts.errors import ScanError


STRING_FORMAT: str = "%s"
BOOLEAN_FORMAT: str = "%b"

TRUE_WORDS: tuple[str, ...] = ("true", "yes", "1", "on")

# Human-readable names (and the Python types describe() accepts) for the
# common formats.
NAMED_FORMATS: dict[str, str] = {
    "string": "%s",
    "str": "%s",
    "integer": "%d",
    "int": "%d",
    "float": "%f",
    "double": "%lf",
    "boolean": "%b",
    "bool": "%b",
}

_DIRECTIVE = re.compile(
    r"%(?P<suppress>\*)?(?P<width>[0-9]+)?(?P<length>hh|h|ll|l|L|j|z|t|q)?(?P<conv>.)?",
    re.DOTALL,
)

_DEC = re.compile(r"[+-]?[0-9]+")
_OCT = re.compile(r"[+-]?[0-7]+")
_HEX = re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+")
_INT = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT = re.compile(
    r"[+-]?(?:inf(?:inity)?|nan"
    r"|0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE | re.ASCII,
)

# Bit widths used to wrap %u conversions, by length modifier.
_UNSIGNED_BITS: dict[str | None, int] = {
    "hh": 8,
    "h": 16,
    None: 32,
    "l": 64,
    "ll": 64,
    "L": 64,
    "j": 64,
    "z": 64,
    "t": 64,
    "q": 64,
}


def _parse_num(val: str) -> int:
    sign = -1 if val[:1] == "-" else 1
    val = val.lstrip("+-")
    if val[:2].lower() == "0x":  # hexadecimal
        radix = 16
    elif val[:1] == "0":  # octal
        radix = 8
    else:  # decimal
        radix = 10

    return sign * int(val, radix)


def _parse_float(val: str) -> float:
    if "x" in val.lower():  # hexadecimal mantissa, binary exponent
        return float.fromhex(val)
    return float(val)


_numeric_cvt: dict[str, tuple[re.Pattern[str], Callable[[str], Any]]] = {
    "d": (_DEC, int),
    "u": (_DEC, int),
    "i": (_INT, _parse_num),
    "o": (_OCT, lambda val: int(val, 8)),
    "x": (_HEX, lambda val: int(val, 16)),
    "X": (_HEX, lambda val: int(val, 16)),
    "f": (_FLOAT, _parse_float),
    "F": (_FLOAT, _parse_float),
    "e": (_FLOAT, _parse_float),
    "E": (_FLOAT, _parse_float),
    "g": (_FLOAT, _parse_float),
    "G": (_FLOAT, _parse_float),
    "a": (_FLOAT, _parse_float),
    "A": (_FLOAT, _parse_float),
}


class Directive(NamedTuple):
    conv: str
    width: int | None
    suppress: bool
    length: str | None = None


def resolve_format(fmt: Any) -> str | None:
    """
    Normalize a format given to describe(): Python types and format
    names become their "%" form, "%" formats are kept as is.  Raises
    ValueError for a type or name that has no format.
    """
    if fmt is None:
        return None
    if isinstance(fmt, type):
        fmt = fmt.__name__
    if fmt in NAMED_FORMATS:
        return NAMED_FORMATS[fmt]
    if not isinstance(fmt, str) or (fmt and "%" not in fmt):
        raise ValueError(f"unknown scan format {fmt!r}")
    return fmt


def parse_bool(value: str) -> bool:
    return value in TRUE_WORDS


def compile_format(fmt: str) -> list[str | Directive]:
    """
    Split a scanf format into literal text and conversion directives.
    Raises ScanError if the format contains an unknown conversion.
    """
    pieces: list[str | Directive] = []
    pos = 0
    while pos < len(fmt):
        ch = fmt[pos]
        if ch != "%":
            pieces.append(ch)
            pos += 1
            continue

        match = _DIRECTIVE.match(fmt, pos)
        conv = match["conv"]
        if conv is None:
            raise ScanError(fmt, "", "format ends inside a conversion")
        if conv == "%":
            pieces.append("%")
        elif conv in _numeric_cvt or conv in "sc":
            width = int(match["width"]) if match["width"] else None
            if width == 0:
                raise ScanError(fmt, "", "zero field width")
            pieces.append(
                Directive(conv, width, bool(match["suppress"]), match["length"])
            )
        else:
            raise ScanError(fmt, "", f"unsupported conversion %{conv}")
        pos = match.end()

    return pieces


def _skip_space(value: str, pos: int) -> int:
    while pos < len(value) and value[pos].isspace():
        pos += 1
    return pos


def _read_field(directive: Directive, value: str, pos: int) -> tuple[Any, int] | None:
    if directive.conv == "c":
        width = directive.width or 1
        if pos + width > len(value):
            return None
        return value[pos:pos + width], pos + width

    pos = _skip_space(value, pos)
    end = len(value) if directive.width is None else min(len(value), pos + directive.width)

    if directive.conv == "s":
        stop = pos
        while stop < end and not value[stop].isspace():
            stop += 1
        if stop == pos:
            return None
        return value[pos:stop], stop

    pattern, cvt = _numeric_cvt[directive.conv]
    match = pattern.match(value, pos, end)
    if match is None:
        return None
    try:
        result = cvt(match.group())
    except ValueError:
        return None
    if directive.conv == "u":
        # negative input wraps around, as strtoul() does
        result %= 1 << _UNSIGNED_BITS[directive.length]
    return result, match.end()


def scan(fmt: str, value: str) -> list[Any]:
    """
    Read 'value' against the scanf format 'fmt' and return the list of
    assigned values.  Scanning stops quietly at the first mismatch, like
    sscanf() does, so the list may be shorter than the number of
    conversions in the format.
    """
    assigned: list[Any] = []
    pos = 0
    for piece in compile_format(fmt):
        if isinstance(piece, Directive):
            field = _read_field(piece, value, pos)
            if field is None:
                break
            result, pos = field
            if not piece.suppress:
                assigned.append(result)
        elif piece.isspace():
            pos = _skip_space(value, pos)
        else:
            if piece == "%":
                pos = _skip_space(value, pos)
            if value[pos:pos + 1] != piece:
                break
            pos += 1

    return assigned


def scan_value(fmt: str | None, value: str) -> Any:
    """
    Read a single typed value out of 'value'.  Raises ScanError unless
    exactly one value comes out of the scan.
    """
    if not fmt:
        raise ScanError(str(fmt), value, "no scan format")
    if fmt == STRING_FORMAT:
        return value
    if fmt == BOOLEAN_FORMAT:
        return parse_bool(value)

    assigned = scan(fmt, value)
    if len(assigned) != 1:
        raise ScanError(fmt, value, f"{len(assigned)} values assigned")
    return assigned[0]
