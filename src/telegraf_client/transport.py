"""Transport connector.

Maps an address URI to a live byte-stream connection:

    tcp://host:port    reliable stream
    udp://host:port    datagrams
    unix:///path/sock  local stream socket

One dial attempt, no retry, the socket's default connect timeout.
"""

from __future__ import annotations

import socket
from typing import Protocol
from urllib.parse import urlsplit

from loguru import logger

from .errors import AddressParseError, DialError, UnsupportedSchemeError

SUPPORTED_SCHEMES = ("tcp", "udp", "unix")


class Connection(Protocol):
    """Anything the write client can push bytes into."""

    def write(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class SocketConnection:
    """A connected socket exposed through the Connection protocol."""

    def __init__(self, sock: socket.socket, address: str):
        self._sock = sock
        self.address = address

    @property
    def is_datagram(self) -> bool:
        return self._sock.type == socket.SOCK_DGRAM

    def write(self, data: bytes) -> None:
        if self.is_datagram:
            self._sock.send(data)
        else:
            self._sock.sendall(data)

    def close(self) -> None:
        self._sock.close()

    def __repr__(self) -> str:
        return f"SocketConnection({self.address!r})"


def parse_address(address: str) -> tuple[str, object]:
    """Split an address into ``(scheme, sockaddr)``.

    ``sockaddr`` is ``(host, port)`` for tcp/udp and a filesystem path for unix.
    """
    try:
        u = urlsplit(address)
    except (ValueError, TypeError, AttributeError) as e:
        raise AddressParseError(f"Failed to parse address {address!r}: {e}") from e

    if not u.scheme:
        raise AddressParseError(f"Failed to parse address {address!r}: missing scheme")
    scheme = u.scheme.lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedSchemeError(scheme)

    if scheme == "unix":
        path = u.netloc + u.path
        if not path:
            raise AddressParseError(f"Failed to parse address {address!r}: missing socket path")
        return scheme, path

    try:
        port = u.port
    except ValueError as e:
        raise AddressParseError(f"Failed to parse address {address!r}: {e}") from e
    if not u.hostname or port is None:
        raise AddressParseError(f"Failed to parse address {address!r}: expected {scheme}://host:port")
    return scheme, (u.hostname, port)


def _dial(scheme: str, sockaddr) -> socket.socket:
    if scheme == "unix":
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    else:
        # first resolved address only: one dial attempt
        host, port = sockaddr
        kind = socket.SOCK_STREAM if scheme == "tcp" else socket.SOCK_DGRAM
        family, kind, proto, _, sockaddr = socket.getaddrinfo(host, port, 0, kind)[0]
        sock = socket.socket(family, kind, proto)
    try:
        sock.connect(sockaddr)
    except OSError:
        sock.close()
        raise
    return sock


def connect(address: str) -> SocketConnection:
    """Open a connection to ``address``.

    Raises AddressParseError, UnsupportedSchemeError or DialError.
    """
    scheme, sockaddr = parse_address(address)
    try:
        sock = _dial(scheme, sockaddr)
    except OSError as e:
        raise DialError(f"Failed to connect to {address!r}: {e}") from e
    logger.debug(f"Connected to {address}")
    return SocketConnection(sock, address)
