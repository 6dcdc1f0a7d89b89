"""A minimal TLS server that answers every client with a fixed reply."""

from __future__ import annotations

import argparse
import socket
import ssl
import sys

DEFAULT_PORT = 12001
DEFAULT_CERT = "cert.pem"
DEFAULT_KEY = "key.pem"
REPLY = b"test\n"


def create_context(
    cert_file: str = DEFAULT_CERT, key_file: str = DEFAULT_KEY
) -> ssl.SSLContext:
    """Build a server TLS context with the given PEM certificate and key."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(certfile=cert_file, keyfile=key_file)
    return context


def create_socket(port: int) -> socket.socket:
    """Create a TCP socket bound to all interfaces on 'port' and listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(("0.0.0.0", port))
        sock.listen(1)
    except OSError:
        sock.close()
        raise
    return sock


def serve_tls(
    sock: socket.socket,
    context: ssl.SSLContext,
    max_connections: int | None = None,
) -> int:
    """Accept clients, complete the TLS handshake and send the fixed reply.

    Handshake failures are reported on standard error and the server moves
    on. Serves until 'max_connections' clients have been handled (forever if
    None) and returns the number handled.
    """
    served = 0
    while max_connections is None or served < max_connections:
        conn, _ = sock.accept()
        with conn:
            try:
                tls = context.wrap_socket(conn, server_side=True)
            except OSError as exc:
                print(f"TLS handshake failed: {exc}", file=sys.stderr)
            else:
                with tls:
                    try:
                        tls.sendall(REPLY)
                        tls.unwrap()
                    except OSError as exc:
                        print(f"TLS connection error: {exc}", file=sys.stderr)
        served += 1
    return served


def main(argv: list[str] | None = None) -> int:
    """Run the TLS server until interrupted."""
    parser = argparse.ArgumentParser(prog="unixkit-tlsd", description=__doc__)
    parser.add_argument("--cert", default=DEFAULT_CERT)
    parser.add_argument("--key", default=DEFAULT_KEY)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    try:
        context = create_context(args.cert, args.key)
    except OSError as exc:
        print(f"Unable to create SSL context: {exc}", file=sys.stderr)
        return 1
    try:
        sock = create_socket(args.port)
    except OSError as exc:
        print(f"Unable to bind: {exc.strerror or exc}", file=sys.stderr)
        return 1
    with sock:
        try:
            serve_tls(sock, context)
        except KeyboardInterrupt:
            return 0
        except OSError as exc:
            print(f"Unable to accept: {exc.strerror or exc}", file=sys.stderr)
            return 1
    return 0