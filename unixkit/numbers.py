"""Conversion of numeric command-line arguments with validation."""

from __future__ import annotations

import enum

LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class NumberFlags(enum.IntFlag):
    """Flags controlling how a numeric argument is converted and checked."""

    NONE = 0
    NONNEG = 0o1
    GT_0 = 0o2
    ANY_BASE = 0o100
    BASE_8 = 0o200
    BASE_16 = 0o400


class NumberArgumentError(ValueError):
    """Raised when a numeric argument cannot be converted or fails a check."""

    def __init__(self, fname: str, msg: str, arg: str | None, name: str | None):
        self.fname = fname
        self.msg = msg
        self.arg = arg
        self.name = name
        text = f"{fname} error"
        if name is not None:
            text += f" (in {name})"
        text += f": {msg}"
        if arg:
            text += f"\n        offending text: {arg}"
        super().__init__(text)


def _has_hex_prefix(text: str) -> bool:
    return (
        len(text) > 2
        and text[:2].lower() == "0x"
        and text[2].lower() in _DIGITS[:16]
    )


def _strtol(text: str, base: int) -> tuple[int | None, str]:
    """Parse like strtol(3); return the value (None if nothing parsed) and the rest."""
    s = text.lstrip(_WHITESPACE)
    sign = 1
    if s[:1] in ("+", "-") and s:
        if s[0] == "-":
            sign = -1
        s = s[1:]
    if base == 0:
        if _has_hex_prefix(s):
            base = 16
            s = s[2:]
        elif s.startswith("0"):
            base = 8
        else:
            base = 10
    elif base == 16 and _has_hex_prefix(s):
        s = s[2:]

    valid = _DIGITS[:base]
    count = 0
    for ch in s:
        if ch.lower() not in valid:
            break
        count += 1
    if count == 0:
        return None, text
    return sign * int(s[:count], base), s[count:]


def _base_for(flags: int) -> int:
    if flags & NumberFlags.ANY_BASE:
        return 0
    if flags & NumberFlags.BASE_8:
        return 8
    if flags & NumberFlags.BASE_16:
        return 16
    return 10


def _get_num(fname: str, arg: str | None, flags: int, name: str | None) -> int:
    if not arg:
        raise NumberArgumentError(fname, "null or empty string", arg, name)

    value, rest = _strtol(arg, _base_for(flags))
    if value is not None and not LONG_MIN <= value <= LONG_MAX:
        raise NumberArgumentError(fname, "strtol() failed", arg, name)
    if value is None or rest:
        raise NumberArgumentError(fname, "nonnumeric characters", arg, name)
    if flags & NumberFlags.NONNEG and value < 0:
        raise NumberArgumentError(fname, "negative value not allowed", arg, name)
    if flags & NumberFlags.GT_0 and value <= 0:
        raise NumberArgumentError(fname, "value must be > 0", arg, name)
    return value


def get_long(arg: str | None, flags: int = 0, name: str | None = None) -> int:
    """Convert 'arg' to a long integer, raising NumberArgumentError on failure."""
    return _get_num("getLong", arg, flags, name)


def get_int(arg: str | None, flags: int = 0, name: str | None = None) -> int:
    """Convert 'arg' to an int, also checking that it fits a 32-bit int."""
    value = _get_num("getInt", arg, flags, name)
    if not INT_MIN <= value <= INT_MAX:
        raise NumberArgumentError("getInt", "integer out of range", arg, name)
    return value