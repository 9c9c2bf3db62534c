"""
Telegraf Client Library

Serialises time-series points as line protocol and writes them to a
collector over TCP, UDP or a Unix socket.

Usage:
    from telegraf_client import TelegrafClient, Measurement, routing_tags

    with TelegrafClient({"address": "tcp://127.0.0.1:8094",
                         "implicit_tags": routing_tags("telemetry")}) as client:
        client.write_point(Measurement(name="cpu", tags={"host": "srv1"}, fields={"usage": 64.5}))
"""

from .client import TelegrafClient, ClientConfig
from .errors import (
    TelegrafClientError,
    ConnectError,
    AddressParseError,
    UnsupportedSchemeError,
    DialError,
    EncodeError,
    WriteError,
)
from .line_protocol import encode, encode_batch
from .models import Measurement
from .tags import ROUTING_TAG_KEY, inject, merge_tags, routing_tags
from .transport import Connection, SocketConnection, connect

__version__ = "1.0.0"
__all__ = [
    "TelegrafClient",
    "ClientConfig",
    "Measurement",
    "encode",
    "encode_batch",
    "inject",
    "merge_tags",
    "routing_tags",
    "ROUTING_TAG_KEY",
    "connect",
    "Connection",
    "SocketConnection",
    "TelegrafClientError",
    "ConnectError",
    "AddressParseError",
    "UnsupportedSchemeError",
    "DialError",
    "EncodeError",
    "WriteError",
]
