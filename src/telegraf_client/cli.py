from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

from .client import ClientConfig, TelegrafClient
from .config import get_settings
from .errors import TelegrafClientError
from .line_protocol import encode
from .models import Measurement
from .tags import merge_tags, routing_tags
from .utils import load_measurements, parse_field_literal, parse_pairs

app = typer.Typer(help="telegraf_client operational CLI")

# ---------------------------
# Common options
# ---------------------------


def address_opt() -> Optional[str]:
    return typer.Option(
        None, "--address", envvar="TELEGRAF_ADDRESS", help="Collector address, e.g. udp://127.0.0.1:8094"
    )


def database_opt() -> Optional[str]:
    return typer.Option(None, "--database", help="Routing tag value added to every point")


def default_tag_opt() -> Optional[List[str]]:
    return typer.Option(None, "--default-tag", help="Implicit tag key=value (repeatable)")


def tag_opt() -> Optional[List[str]]:
    return typer.Option(None, "--tag", "-t", help="Tag key=value (repeatable)")


def field_opt() -> List[str]:
    return typer.Option(..., "--field", "-f", help="Field key=value, value in wire form (repeatable)")


def timestamp_opt() -> Optional[int]:
    return typer.Option(None, "--timestamp", help="Nanosecond epoch timestamp")


# ---------------------------
# Helpers
# ---------------------------


def _measurement(name: str, tags: Optional[List[str]], fields: List[str], timestamp: Optional[int]) -> Measurement:
    field_map = {k: parse_field_literal(v) for k, v in parse_pairs(fields, "field").items()}
    return Measurement(name=name, tags=parse_pairs(tags or []), fields=field_map, timestamp=timestamp)


def _client(address: Optional[str], database: Optional[str], default_tags: Optional[List[str]]) -> TelegrafClient:
    settings = get_settings()
    implicit = merge_tags(
        settings.implicit_tags,
        parse_pairs(default_tags or [], "default tag"),
        routing_tags(database) if database else None,
    )
    return TelegrafClient(ClientConfig(address=address or settings.ADDRESS, implicit_tags=implicit))


# ---------------------------
# Commands
# ---------------------------


@app.command("encode")
def encode_cmd(
    name: str = typer.Argument(..., help="Measurement name"),
    tag: Optional[List[str]] = tag_opt(),
    field: List[str] = field_opt(),
    timestamp: Optional[int] = timestamp_opt(),
):
    """Print the line-protocol rendering of one point without sending it."""
    try:
        typer.echo(encode(_measurement(name, tag, field, timestamp)))
    except (ValueError, TelegrafClientError) as e:
        logger.error(f"Failed to encode point: {e}")
        sys.exit(1)


@app.command("write")
def write(
    name: str = typer.Argument(..., help="Measurement name"),
    tag: Optional[List[str]] = tag_opt(),
    field: List[str] = field_opt(),
    timestamp: Optional[int] = timestamp_opt(),
    address: Optional[str] = address_opt(),
    database: Optional[str] = database_opt(),
    default_tag: Optional[List[str]] = default_tag_opt(),
):
    """Send one point to the collector."""
    try:
        point = _measurement(name, tag, field, timestamp)
        with _client(address, database, default_tag) as client:
            client.write_point(point)
        logger.success(f"Wrote point {name!r}")
    except (ValueError, TelegrafClientError) as e:
        logger.error(f"Failed to write point: {e}")
        sys.exit(1)


@app.command("write-ndjson")
def write_ndjson(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="NDJSON file (.gz allowed)"),
    address: Optional[str] = address_opt(),
    database: Optional[str] = database_opt(),
    default_tag: Optional[List[str]] = default_tag_opt(),
):
    """Send every measurement in an NDJSON file as a single batch."""
    try:
        points = load_measurements(path)
        logger.info(f"Loaded {len(points)} point(s) from {path}")
        with _client(address, database, default_tag) as client:
            client.write_points(points)
        logger.success(f"Wrote {len(points)} point(s)")
    except (ValueError, TelegrafClientError) as e:
        logger.error(f"Failed to write {path}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    app()
