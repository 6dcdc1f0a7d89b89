"""Socket helpers: exact-length reads and writes, loose address parsing, byte order."""

from __future__ import annotations

import socket
import struct

_IPV4_MAPPED_PREFIX = b"\x00" * 10 + b"\xff\xff"


def read_n(sock: socket.socket, n: int) -> bytes:
    """Read up to 'n' bytes from 'sock', stopping early only at end of file."""
    if n < 0:
        raise ValueError("byte count must be >= 0")
    chunks = []
    remaining = n
    while remaining > 0:
        chunk = sock.recv(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def write_n(sock: socket.socket, data: bytes) -> int:
    """Write all of 'data' to 'sock' and return the number of bytes written."""
    sock.sendall(data)
    return len(data)


def inet_pton_loose(family: int, text: str) -> bytes:
    """Convert an address to binary form, falling back to inet_aton() rules.

    For AF_INET a loose dotted form such as "127.1" is accepted. For AF_INET6
    such a form yields the IPv4-mapped IPv6 address. Raises ValueError if the
    text is not an address of either kind.
    """
    if family not in (socket.AF_INET, socket.AF_INET6):
        raise ValueError(f"unsupported address family: {family}")
    try:
        return socket.inet_pton(family, text)
    except OSError:
        pass
    try:
        ipv4 = socket.inet_aton(text)
    except OSError as exc:
        raise ValueError(f"invalid address: {text!r}") from exc
    if family == socket.AF_INET:
        return ipv4
    return _IPV4_MAPPED_PREFIX + ipv4


def byte_order() -> str:
    """Return "big-endian", "little-endian" or "unknown" for this host."""
    raw = struct.pack("=h", 0x0102)
    if raw == b"\x01\x02":
        return "big-endian"
    if raw == b"\x02\x01":
        return "little-endian"
    return "unknown"


def sock_ntop(address: tuple) -> str:
    """Render an IPv4 (host, port) address as "host:port", or "host" if port is 0."""
    if len(address) != 2:
        raise ValueError("unsupported address family")
    host, port = address
    try:
        text = socket.inet_ntop(socket.AF_INET, socket.inet_pton(socket.AF_INET, host))
    except OSError as exc:
        raise ValueError(f"invalid IPv4 address: {host!r}") from exc
    if port != 0:
        text += f":{port}"
    return text