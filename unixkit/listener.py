"""A select-driven multi-client TCP listener, a chat server and a tiny web server."""

from __future__ import annotations

import abc
import argparse
import contextlib
import selectors
import socket
import sys
from pathlib import Path

BUF_SIZE = 4096
WELCOME = b"Welcome to the chat server!\r\n"
NOT_FOUND = "<h1>404 Not Found</h1>"
DEFAULT_DOCUMENT = "wwwroot/index.html"


class TcpListener(abc.ABC):
    """Accept many clients on one socket and dispatch their traffic to hooks."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self._sock: socket.socket | None = None
        self._clients: list[socket.socket] = []
        self._wake_r: socket.socket | None = None
        self._wake_w: socket.socket | None = None
        self._running = False

    @property
    def address(self) -> tuple:
        """The address the listening socket is bound to."""
        if self._sock is None:
            raise RuntimeError("listener is not open")
        return self._sock.getsockname()

    def open(self) -> None:
        """Create, bind and start listening; raises OSError on failure."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind((self.host, self.port))
            sock.listen(socket.SOMAXCONN)
        except OSError:
            sock.close()
            raise
        self._sock = sock
        self._wake_r, self._wake_w = socket.socketpair()
        self._running = True

    def run(self) -> None:
        """Serve clients until stop() is called, then close every socket."""
        if self._sock is None or self._wake_r is None:
            raise RuntimeError("listener is not open")
        selector = selectors.DefaultSelector()
        selector.register(self._sock, selectors.EVENT_READ)
        selector.register(self._wake_r, selectors.EVENT_READ)
        try:
            while self._running:
                for key, _ in selector.select():
                    ready = key.fileobj
                    if ready is self._wake_r:
                        with contextlib.suppress(OSError):
                            self._wake_r.recv(BUF_SIZE)
                    elif ready is self._sock:
                        client, _ = self._sock.accept()
                        self._clients.append(client)
                        selector.register(client, selectors.EVENT_READ)
                        self.on_client_connected(client)
                    else:
                        self._service(selector, ready)
        finally:
            selector.close()
            self._close_all()

    def _service(self, selector: selectors.BaseSelector, client: socket.socket) -> None:
        try:
            data = client.recv(BUF_SIZE)
        except OSError:
            data = b""
        if data:
            self.on_message_received(client, data)
            return
        self.on_client_disconnected(client)
        selector.unregister(client)
        self._clients.remove(client)
        client.close()

    def stop(self) -> None:
        """Ask a running listener to finish; safe to call from another thread."""
        self._running = False
        if self._wake_w is not None:
            with contextlib.suppress(OSError):
                self._wake_w.send(b"\x00")

    def _close_all(self) -> None:
        for client in self._clients:
            client.close()
        self._clients.clear()
        for sock in (self._sock, self._wake_r, self._wake_w):
            if sock is not None:
                sock.close()
        self._sock = self._wake_r = self._wake_w = None
        self._running = False

    def send_to_client(self, client: socket.socket, data: bytes) -> int:
        """Send all of 'data' to 'client' and return the number of bytes sent."""
        client.sendall(data)
        return len(data)

    def broadcast_to_clients(self, sender: socket.socket, data: bytes) -> None:
        """Send 'data' to every client but 'sender'.

        If any send fails, the error text is sent back to 'sender'.
        """
        error: OSError | None = None
        for client in list(self._clients):
            if client is sender:
                continue
            try:
                self.send_to_client(client, data)
            except OSError as exc:
                error = exc
        if error is not None:
            message = (error.strerror or str(error)).encode() + b"\x00"
            with contextlib.suppress(OSError):
                self.send_to_client(sender, message)

    @abc.abstractmethod
    def on_client_connected(self, client: socket.socket) -> None:
        """Called after a new client has been accepted."""

    @abc.abstractmethod
    def on_client_disconnected(self, client: socket.socket) -> None:
        """Called before a departed client is closed."""

    @abc.abstractmethod
    def on_message_received(self, client: socket.socket, data: bytes) -> None:
        """Called with every chunk of data a client sends."""


class MultiClientChat(TcpListener):
    """Relay every message to all other connected clients."""

    def on_client_connected(self, client: socket.socket) -> None:
        with contextlib.suppress(OSError):
            self.send_to_client(client, WELCOME + b"\x00")

    def on_client_disconnected(self, client: socket.socket) -> None:
        """Nothing is done when a chat client leaves."""

    def on_message_received(self, client: socket.socket, data: bytes) -> None:
        self.broadcast_to_clients(client, data)


def http_response(content: str | bytes) -> bytes:
    """Build an HTTP 200 response carrying 'content' as HTML."""
    body = content.encode() if isinstance(content, str) else content
    head = (
        "HTTP/1.1 200 OK\r\n"
        "Cache-Control: no-cache, private\r\n"
        "Content-Type: text/html\r\n"
        f"Content-Length: {len(body)}\r\n"
        "\r\n"
    )
    return head.encode() + body


class WebServer(TcpListener):
    """Answer every message with one fixed HTML document."""

    def __init__(
        self, host: str, port: int, document: str | Path = DEFAULT_DOCUMENT
    ) -> None:
        super().__init__(host, port)
        self.document = Path(document)

    def on_client_connected(self, client: socket.socket) -> None:
        """Nothing is done when a web client connects."""

    def on_client_disconnected(self, client: socket.socket) -> None:
        """Nothing is done when a web client leaves."""

    def on_message_received(self, client: socket.socket, data: bytes) -> None:
        try:
            content: str | bytes = self.document.read_bytes()
        except OSError:
            content = NOT_FOUND
        with contextlib.suppress(OSError):
            self.send_to_client(client, http_response(content) + b"\x00")


def main(argv: list[str] | None = None) -> int:
    """Run the web server on all interfaces."""
    parser = argparse.ArgumentParser(prog="unixkit-web", description=__doc__)
    parser.add_argument("port", type=int)
    parser.add_argument("--document", default=DEFAULT_DOCUMENT)
    args = parser.parse_args(argv)
    server = WebServer("0.0.0.0", args.port, args.document)
    try:
        server.open()
    except OSError as exc:
        print(f"Can't listen on port {args.port}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    try:
        server.run()
    except KeyboardInterrupt:
        return 0
    return 0