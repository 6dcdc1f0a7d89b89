"""Run read, write and seek commands against a file."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator

from unixkit.numbers import NumberArgumentError, NumberFlags, get_long

_USAGE = "{prog} file {{r<length> | R<length> | w<string> | s<offset>}}..."


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte <= 0x7E else "?"


def _read(fd: int, command: str) -> str:
    length = get_long(command[1:], NumberFlags.ANY_BASE, command)
    if length < 0:
        raise ValueError(f"{command}: negative length")
    data = os.read(fd, length)
    if not data:
        return f"{command}: end-of-file"
    if command[0] == "r":
        body = "".join(_printable(b) for b in data)
    else:
        body = "".join(f"{b:02x} " for b in data)
    return f"{command}: {body}"


def run_commands(path: str, commands: Iterable[str]) -> Iterator[str]:
    """Open 'path' (creating it) and yield one output line per command.

    Commands: r<length> reads and shows text, R<length> reads and shows hex,
    w<string> writes at the current offset, s<offset> seeks.
    """
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
    try:
        for command in commands:
            kind = command[:1]
            if kind in ("r", "R"):
                yield _read(fd, command)
            elif kind == "w":
                written = os.write(fd, command[1:].encode())
                yield f"{command}: wrote {written} bytes"
            elif kind == "s":
                offset = get_long(command[1:], NumberFlags.ANY_BASE, command)
                os.lseek(fd, offset, os.SEEK_SET)
                yield f"{command}: seek succeded"
            else:
                yield f"Argument must start with [rRws]: {command}"
    finally:
        os.close(fd)


def main(argv: list[str] | None = None) -> int:
    """Apply the commands given on the command line to a file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2 or args[0] == "--help":
        print(_USAGE.format(prog="seek-io"))
        return 0
    try:
        for line in run_commands(args[0], args[1:]):
            print(line)
    except NumberArgumentError as exc:
        print(exc, file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        detail = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
        print(f"ERROR: {detail}", file=sys.stderr)
        return 1
    return 0