from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Mapping, Optional, Sequence, Union

from loguru import logger

from .config import Settings
from .errors import EncodeError, WriteError, map_os_error
from .line_protocol import encode
from .metrics import CLIENT_POINTS_TOTAL, CLIENT_WRITE_LATENCY, CLIENT_WRITES_TOTAL
from .models import Measurement
from .tags import inject
from .transport import Connection, connect


@dataclass(frozen=True)
class ClientConfig:
    address: str
    # default tags, a routing tag, or both merged; empty disables injection
    implicit_tags: Mapping[str, str] = field(default_factory=dict)


class TelegrafClient:
    """
    Writes measurements to a Telegraf-style collector over a single connection.

    Usage:
        with TelegrafClient({"address": "udp://127.0.0.1:8094",
                             "implicit_tags": routing_tags("metrics")}) as client:
            client.write_point(Measurement(name="cpu", fields={"usage": 64.5}))

    Not thread-safe: callers sharing one instance must serialise writes.
    """

    def __init__(
        self,
        config: Union[ClientConfig, dict],
        connection: Optional[Connection] = None,
    ):
        self._cfg = config if isinstance(config, ClientConfig) else ClientConfig(**config)
        self._implicit_tags = dict(self._cfg.implicit_tags)
        self._conn: Optional[Connection] = connection if connection is not None else connect(self._cfg.address)

    @classmethod
    def from_settings(cls, settings: Settings, connection: Optional[Connection] = None) -> "TelegrafClient":
        return cls(ClientConfig(address=settings.ADDRESS, implicit_tags=settings.implicit_tags), connection)

    @property
    def implicit_tags(self) -> dict[str, str]:
        return dict(self._implicit_tags)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        """Release the connection; safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        conn.close()
        logger.debug(f"Closed connection to {self._cfg.address}")

    def __enter__(self) -> "TelegrafClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------- internal helpers ----------

    def _render(self, op: str, m: Measurement) -> str:
        try:
            return encode(inject(m, self._implicit_tags))
        except EncodeError as e:
            CLIENT_WRITES_TOTAL.labels(op=op, status="failure").inc()
            raise WriteError(f"cannot encode measurement: {e}") from e

    def _ensure_open(self, op: str) -> Connection:
        if self._conn is None:
            CLIENT_WRITES_TOTAL.labels(op=op, status="failure").inc()
            raise WriteError("connection closed")
        return self._conn

    def _send(self, conn: Connection, op: str, payload: str, npoints: int) -> None:
        t0 = perf_counter()
        try:
            conn.write(payload.encode("utf-8"))
        except OSError as e:
            CLIENT_WRITES_TOTAL.labels(op=op, status="failure").inc()
            raise map_os_error(e) from e
        CLIENT_WRITE_LATENCY.labels(op=op).observe(perf_counter() - t0)
        CLIENT_WRITES_TOTAL.labels(op=op, status="success").inc()
        CLIENT_POINTS_TOTAL.inc(npoints)
        logger.debug(f"Wrote {npoints} point(s), {len(payload)} chars to {self._cfg.address}")

    # ---------- writes ----------

    def write_point(self, m: Measurement) -> None:
        """Inject implicit tags, encode and write one line."""
        conn = self._ensure_open("point")
        self._send(conn, "point", self._render("point", m) + "\n", 1)

    def write_points(self, ms: Sequence[Measurement]) -> None:
        """Write all measurements in one transport call.

        Stops at the first measurement that fails to encode; nothing is sent in
        that case. A transport failure may leave part of the payload delivered.
        """
        conn = self._ensure_open("batch")
        lines = [self._render("batch", m) for m in ms]
        if not lines:
            return
        self._send(conn, "batch", "\n".join(lines) + "\n", len(lines))
