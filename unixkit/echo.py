"""TCP echo and single-reply servers with a matching line client."""

from __future__ import annotations

import argparse
import contextlib
import os
import socket
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

DEFAULT_PORT = 54003
BUF_SIZE = 4096
SHORT_BUF_SIZE = 255
ONCE_REPLY = b"I got your message"
FORK_REPLY = b"Received"


def _text(data: bytes) -> str:
    return data.decode(errors="replace").rstrip("\x00")


def echo_session(conn: socket.socket, out: TextIO | None = None) -> int:
    """Echo every message on 'conn' until the client disconnects.

    Each message is shown on 'out' and sent back followed by a NUL byte.
    Returns the number of messages echoed.
    """
    out = sys.stdout if out is None else out
    count = 0
    while True:
        try:
            data = conn.recv(BUF_SIZE)
        except OSError:
            print("There was a connection issue", file=sys.stderr)
            break
        if not data:
            print("The client disconnected", file=out)
            break
        print(f"Received: {_text(data)}", file=out)
        with contextlib.suppress(OSError):
            conn.sendall(data + b"\x00")
        count += 1
    return count


def _answer(conn: socket.socket, reply: bytes, out: TextIO, label: str) -> str:
    message = _text(conn.recv(SHORT_BUF_SIZE))
    print(f"{label}{message}", file=out)
    conn.sendall(reply)
    return message


def answer_once(
    conn: socket.socket, reply: bytes = ONCE_REPLY, out: TextIO | None = None
) -> str:
    """Read one message of at most 255 bytes, show it and send 'reply'.

    Returns the message received.
    """
    out = sys.stdout if out is None else out
    return _answer(conn, reply, out, "Here is the message: ")


def _describe_peer(address: tuple) -> str:
    try:
        host, service = socket.getnameinfo(address[:2], 0)
    except OSError:
        host, service = address[0], str(address[1])
    return f"{host} connected on {service}"


def serve_echo(sock: socket.socket, out: TextIO | None = None) -> int:
    """Accept one client on 'sock', close 'sock', then echo until it leaves.

    Returns the number of messages echoed.
    """
    out = sys.stdout if out is None else out
    conn, address = sock.accept()
    sock.close()
    with conn:
        print(_describe_peer(address), file=out)
        return echo_session(conn, out)


def _reap(children: set[int], block: bool) -> None:
    for pid in list(children):
        try:
            done, _ = os.waitpid(pid, 0 if block else os.WNOHANG)
        except ChildProcessError:
            done = pid
        if done:
            children.discard(pid)


def serve_forking(
    sock: socket.socket,
    out: TextIO | None = None,
    max_connections: int | None = None,
) -> int:
    """Accept clients and answer each one in a child process.

    Every child reads one message, shows it on 'out' and replies "Received".
    Serves until 'max_connections' clients have been handed to children
    (forever if None) and returns the number served.
    """
    out = sys.stdout if out is None else out
    served = 0
    children: set[int] = set()
    try:
        while max_connections is None or served < max_connections:
            try:
                conn, _ = sock.accept()
            except OSError:
                print("Error accepting connection", file=sys.stderr)
                continue
            out.flush()
            try:
                pid = os.fork()
            except OSError:
                print("Error on fork", file=sys.stderr)
                conn.close()
                continue
            if pid == 0:
                status = 0
                try:
                    sock.close()
                    with conn:
                        _answer(conn, FORK_REPLY, out, "CLIENT: ")
                    out.flush()
                except Exception:
                    status = 1
                finally:
                    os._exit(status)
            conn.close()
            children.add(pid)
            served += 1
            _reap(children, block=False)
    finally:
        _reap(children, block=True)
    return served


def echo_client(host: str, port: int, lines: Iterable[str]) -> Iterator[str]:
    """Send each line (NUL-terminated) to an echo server and yield its replies.

    Trailing NUL bytes are removed from the replies. Stops early if the
    server closes the connection.
    """
    with socket.create_connection((host, port)) as sock:
        for line in lines:
            sock.sendall(line.encode() + b"\x00")
            data = sock.recv(BUF_SIZE)
            if not data:
                return
            yield _text(data)


def _send_once(host: str, port: int, text: str) -> str:
    with socket.create_connection((host, port)) as sock:
        sock.sendall(text.encode())
        return _text(sock.recv(SHORT_BUF_SIZE))


def _prompted_lines() -> Iterator[str]:
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        line = sys.stdin.readline()
        if not line:
            return
        yield line.rstrip("\n")


def client_main(argv: list[str] | None = None) -> int:
    """Send lines typed on standard input to a server and print the replies."""
    parser = argparse.ArgumentParser(prog="unixkit-echo", description=__doc__)
    parser.add_argument("host", nargs="?", default="127.0.0.1")
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--once", action="store_true", help="send a single message and print the reply"
    )
    args = parser.parse_args(argv)
    try:
        if args.once:
            sys.stdout.write("Please enter the message: ")
            sys.stdout.flush()
            reply = _send_once(args.host, args.port, sys.stdin.readline())
            sys.stdout.write(reply)
        else:
            for reply in echo_client(args.host, args.port, _prompted_lines()):
                sys.stdout.write(f"SERVER> {reply}\r\n")
    except OSError as exc:
        print(f"Error connecting: {exc.strerror or exc}", file=sys.stderr)
        return 1
    return 0


def server_main(argv: list[str] | None = None) -> int:
    """Run an echo, single-reply or forking server on all interfaces."""
    parser = argparse.ArgumentParser(
        prog="unixkit-echod", description="Serve TCP clients on all interfaces."
    )
    parser.add_argument("port", nargs="?", type=int, default=DEFAULT_PORT)
    parser.add_argument("--mode", choices=("echo", "once", "fork"), default="echo")
    args = parser.parse_args(argv)
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("0.0.0.0", args.port))
            if args.mode == "echo":
                sock.listen(socket.SOMAXCONN)
                serve_echo(sock)
            elif args.mode == "once":
                sock.listen(5)
                conn, _ = sock.accept()
                with conn:
                    answer_once(conn, ONCE_REPLY)
            else:
                sock.listen(5)
                serve_forking(sock)
    except OSError as exc:
        print(f"Can't serve on port {args.port}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0