"""File I/O utilities: copying, benchmark writes, offsets, appends and vectored reads."""

from __future__ import annotations

import argparse
import mmap
import os
import re
import sys

DEFAULT_BUF_SIZE = 1024
DEFAULT_ALIGNMENT = 4096
SYNC_MODES = ("o_sync", "fsync", "fdatasync")

_INT_SIZE = 4
_STR_SIZE = 100
_O_SYNC = getattr(os, "O_SYNC", 0)
_O_DIRECT = getattr(os, "O_DIRECT", 0)


def _write_all(fd: int, data: bytes) -> int:
    written = os.write(fd, data)
    if written != len(data):
        raise OSError(f"could not write whole buffer ({written} of {len(data)} bytes)")
    return written


def copy_file(src: str, dst: str, buf_size: int = DEFAULT_BUF_SIZE) -> int:
    """Copy 'src' to 'dst' in chunks of 'buf_size' bytes; return the bytes copied."""
    if buf_size <= 0:
        raise ValueError("buffer size must be > 0")
    in_fd = os.open(src, os.O_RDONLY)
    try:
        out_fd = os.open(
            dst, os.O_CREAT | os.O_WRONLY | os.O_TRUNC | _O_SYNC, 0o666
        )
        try:
            total = 0
            while chunk := os.read(in_fd, buf_size):
                total += _write_all(out_fd, chunk)
            return total
        finally:
            os.close(out_fd)
    finally:
        os.close(in_fd)


def write_bytes(
    path: str, num_bytes: int, buf_size: int, sync: str | None = None
) -> int:
    """Write 'num_bytes' bytes to 'path' using writes of at most 'buf_size' bytes.

    'sync' may be None, "o_sync" (open with O_SYNC), "fsync" or "fdatasync"
    (flush after every write). The file is not truncated. Returns the total
    number of bytes written; a short write ends the loop early.
    """
    if sync is not None and sync not in SYNC_MODES:
        raise ValueError(f"unknown sync mode: {sync!r}")
    if buf_size <= 0:
        raise ValueError("buffer size must be > 0")
    flags = os.O_CREAT | os.O_WRONLY
    if sync == "o_sync":
        flags |= _O_SYNC
    buf = bytes(buf_size)
    fd = os.open(path, flags, 0o600)
    try:
        total = 0
        while total < num_bytes:
            this_write = min(buf_size, num_bytes - total)
            written = os.write(fd, buf[:this_write])
            if written != this_write:
                total += max(written, 0)
                break
            total += written
            if sync == "fsync":
                os.fsync(fd)
            elif sync == "fdatasync":
                os.fdatasync(fd)
        return total
    finally:
        os.close(fd)


def write_at_offset(path: str, offset: int) -> int:
    """Write the 4 bytes b"test" at 'offset' in 'path', creating it if needed."""
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o600)
    try:
        os.lseek(fd, offset, os.SEEK_SET)
        return os.write(fd, b"test")
    finally:
        os.close(fd)


def append_text(path: str, text: str) -> int:
    """Write 'text' to an existing file opened in append mode.

    The offset is moved to the start first, but O_APPEND still places the
    data at the end. Returns the number of bytes written.
    """
    fd = os.open(path, os.O_RDWR | os.O_APPEND)
    try:
        os.lseek(fd, 0, os.SEEK_SET)
        return os.write(fd, text.encode())
    finally:
        os.close(fd)


def append_bytes(path: str, num_bytes: int, use_seek: bool = False) -> int:
    """Append 'num_bytes' single bytes b"s" to 'path', one write each.

    With 'use_seek' the file is opened without O_APPEND and the offset is
    moved to the end before each write (not atomic); otherwise O_APPEND is
    used. Returns the number of bytes written.
    """
    flags = os.O_RDWR | os.O_CREAT
    if not use_seek:
        flags |= os.O_APPEND
    fd = os.open(path, flags, 0o600)
    try:
        total = 0
        for _ in range(max(num_bytes, 0)):
            if use_seek:
                os.lseek(fd, 0, os.SEEK_END)
            os.write(fd, b"s")
            total += 1
        return total
    finally:
        os.close(fd)


def read_vector(path: str) -> tuple[int, int]:
    """Scatter-read an int-sized buffer and a 100-byte buffer from 'path'.

    Returns (bytes requested, bytes read).
    """
    fd = os.open(path, os.O_RDONLY)
    try:
        number = bytearray(_INT_SIZE)
        text = bytearray(_STR_SIZE)
        num_read = os.readv(fd, [number, text])
    finally:
        os.close(fd)
    return _INT_SIZE + _STR_SIZE, num_read


def direct_read(
    path: str, length: int, offset: int = 0, alignment: int = DEFAULT_ALIGNMENT
) -> int:
    """Read 'length' bytes at 'offset' with O_DIRECT into an aligned buffer.

    Returns the number of bytes read.
    """
    if alignment <= 0:
        raise ValueError("alignment must be > 0")
    if length < 0:
        raise ValueError("length must be >= 0")
    fd = os.open(path, os.O_RDONLY | _O_DIRECT)
    try:
        with mmap.mmap(-1, length + 2 * alignment) as region:
            os.lseek(fd, offset, os.SEEK_SET)
            with memoryview(region) as whole, whole[
                alignment : alignment + length
            ] as view:
                return os.readv(fd, [view])
    finally:
        os.close(fd)


def _atoi(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="unixkit-fileio", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("copy", help="copy a file")
    p.add_argument("src")
    p.add_argument("dst")

    p = sub.add_parser("write-bytes", help="write bytes for benchmarking")
    p.add_argument("file")
    p.add_argument("num_bytes")
    p.add_argument("buf_size")
    p.add_argument("--sync", choices=SYNC_MODES, default=None)

    p = sub.add_parser("large-file", help="write b'test' at a large offset")
    p.add_argument("file")
    p.add_argument("offset")

    p = sub.add_parser("append-text", help="write text to a file in append mode")
    p.add_argument("file")
    p.add_argument("text")

    p = sub.add_parser("append-bytes", help="append single bytes")
    p.add_argument("file")
    p.add_argument("num_bytes")
    p.add_argument("seek", nargs="?", default=None)

    p = sub.add_parser("readv", help="scatter read from a file")
    p.add_argument("file")

    p = sub.add_parser("direct-read", help="read with O_DIRECT")
    p.add_argument("file")
    p.add_argument("length")
    p.add_argument("offset", nargs="?", default="0")
    p.add_argument("alignment", nargs="?", default=str(DEFAULT_ALIGNMENT))
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one of the file I/O commands."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "copy":
            copy_file(args.src, args.dst)
        elif args.command == "write-bytes":
            write_bytes(
                args.file, _atoi(args.num_bytes), _atoi(args.buf_size), args.sync
            )
        elif args.command == "large-file":
            write_at_offset(args.file, _atoi(args.offset))
        elif args.command == "append-text":
            written = append_text(args.file, args.text)
            print(f"{args.file} file")
            print(
                f"{args.text} | total: {len(args.text.encode())} bytes, "
                f"wrote: {written} bytes"
            )
        elif args.command == "append-bytes":
            num_bytes = _atoi(args.num_bytes)
            print(f"Number of bytes: {num_bytes}")
            total = append_bytes(args.file, num_bytes, args.seek is not None)
            print(f"File {args.file} | Num. Bytes: {num_bytes}, Wrote: {total}")
        elif args.command == "readv":
            requested, num_read = read_vector(args.file)
            if num_read < requested:
                print("Read fewer bytes than requested")
            print(f"Total bytes requested: {requested}; bytes read: {num_read}")
        elif args.command == "direct-read":
            num_read = direct_read(
                args.file,
                _atoi(args.length),
                _atoi(args.offset),
                _atoi(args.alignment),
            )
            print(f"Read {num_read} bytes")
    except (OSError, ValueError) as exc:
        detail = exc.strerror if isinstance(exc, OSError) and exc.strerror else exc
        print(f"{args.command} - errno prints: {detail}", file=sys.stderr)
        return 1
    return 0