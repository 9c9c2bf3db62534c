"""
Custom exceptions for the Telegraf client.

Provides structured error kinds so callers branch on type, not message text.
"""

import errno


class TelegrafClientError(Exception):
    """Base error for the Telegraf client."""

    pass


class ConnectError(TelegrafClientError):
    """The connector could not produce a live connection."""

    pass


class AddressParseError(ConnectError):
    """Malformed address URI."""

    pass


class UnsupportedSchemeError(ConnectError):
    """Well-formed URI with a scheme no transport handles."""

    def __init__(self, scheme: str):
        super().__init__(f"Protocol {scheme!r} not supported")
        self.scheme = scheme


class DialError(ConnectError):
    """Transport-level connect failure."""

    pass


class EncodeError(TelegrafClientError):
    """Measurement cannot be rendered as line protocol."""

    pass


class WriteError(TelegrafClientError):
    """Writing to the connection failed (including writes after close)."""

    pass


_DISCONNECT_ERRNOS = {errno.EPIPE, errno.ECONNRESET, errno.ECONNABORTED, errno.ENOTCONN}


def map_os_error(e: OSError) -> WriteError:
    if isinstance(e, ConnectionError) or e.errno in _DISCONNECT_ERRNOS:
        return WriteError(f"connection lost: {e}")
    if isinstance(e, TimeoutError):
        return WriteError(f"write timed out: {e}")
    return WriteError(str(e))
