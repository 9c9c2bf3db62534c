"""
Pytest configuration and fixtures for telegraf-client.

Provides an in-memory connection double, sample points and loopback sockets.
"""

from __future__ import annotations

import socket

import pytest

from telegraf_client.config import get_settings
from telegraf_client.models import Measurement


class FakeConnection:
    """Connection double that records every write."""

    def __init__(self, fail: Exception | None = None):
        self.writes: list[bytes] = []
        self.close_calls = 0
        self.fail = fail

    def write(self, data: bytes) -> None:
        if self.fail is not None:
            raise self.fail
        self.writes.append(data)

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from TELEGRAF_* variables in the caller's environment."""
    for var in ("TELEGRAF_ADDRESS", "TELEGRAF_DEFAULT_TAGS", "TELEGRAF_DATABASE"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_conn():
    return FakeConnection()


@pytest.fixture
def conn_factory():
    """Build a FakeConnection, optionally failing every write with ``fail``."""
    return FakeConnection


@pytest.fixture
def cpu_point():
    return Measurement(
        name="cpu",
        tags={"host": "srv1"},
        fields={"usage": 64.5},
        timestamp=1000000000,
    )


@pytest.fixture
def udp_receiver():
    """Bound loopback UDP socket; yields (socket, address URI)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    try:
        yield sock, f"udp://127.0.0.1:{sock.getsockname()[1]}"
    finally:
        sock.close()
