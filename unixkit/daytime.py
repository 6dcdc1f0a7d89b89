"""A TCP daytime server and client."""

from __future__ import annotations

import argparse
import socket
import sys
import time

DEFAULT_PORT = 12001
MAXLINE = 4096
LISTENQ = 1024


def daytime_string(t: float | None = None) -> str:
    """Return the ctime() text of 't' (default: now) followed by CR LF."""
    if t is None:
        t = time.time()
    return f"{time.ctime(t)[:24]}\r\n"


def serve_daytime(
    sock: socket.socket,
    byte_at_a_time: bool = False,
    max_connections: int | None = None,
) -> int:
    """Accept connections on a listening socket and send each the daytime.

    With 'byte_at_a_time' every byte is sent by a separate call. Serves until
    'max_connections' connections have been handled (forever if None) and
    returns the number served.
    """
    served = 0
    while max_connections is None or served < max_connections:
        conn, _ = sock.accept()
        with conn:
            data = daytime_string().encode()
            if byte_at_a_time:
                for i in range(len(data)):
                    conn.sendall(data[i : i + 1])
            else:
                conn.sendall(data)
        served += 1
    return served


def fetch_daytime(host: str, port: int = DEFAULT_PORT) -> list[str]:
    """Connect to a daytime server and return the chunks read until end of file."""
    try:
        socket.inet_pton(socket.AF_INET, host)
    except OSError as exc:
        raise ValueError(f"inet_pton error: {host!r}") from exc
    chunks = []
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.connect((host, port))
        while chunk := sock.recv(MAXLINE):
            chunks.append(chunk.decode(errors="replace"))
    return chunks


def client_main(argv: list[str] | None = None) -> int:
    """Print the time reported by a daytime server."""
    parser = argparse.ArgumentParser(prog="unixkit-daytime", description=__doc__)
    parser.add_argument("host")
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--count", action="store_true", help="report each read and the read count"
    )
    args = parser.parse_args(argv)
    try:
        chunks = fetch_daytime(args.host, args.port)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    except OSError as exc:
        print(
            f"Value of errno: {exc.errno} | Error message: {exc.strerror or exc}",
            file=sys.stderr,
        )
        return 1
    for chunk in chunks:
        sys.stdout.write(chunk)
        if args.count:
            sys.stdout.write(f"\nString length received: {len(chunk)}\n")
    if args.count:
        print(f"Number of times n > 0: {len(chunks)}")
    return 0


def server_main(argv: list[str] | None = None) -> int:
    """Run a daytime server on all interfaces."""
    parser = argparse.ArgumentParser(
        prog="unixkit-daytimed", description="Serve the time of day over TCP."
    )
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--byte-at-a-time", action="store_true", help="send one byte per write"
    )
    args = parser.parse_args(argv)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("0.0.0.0", args.port))
            sock.listen(LISTENQ)
            serve_daytime(sock, args.byte_at_a_time)
    except OSError as exc:
        print(f"The error message is: {exc.strerror or exc}")
        return 1
    except KeyboardInterrupt:
        return 0
    return 0