"""
Utility functions for the Telegraf client.

Includes NDJSON reading and command-line literal parsing.
"""

import gzip
import json
from pathlib import Path
from typing import Dict, Iterator, List, Union

from .models import FieldValue, Measurement


def iter_ndjson(path: Union[str, Path]) -> Iterator[dict]:
    """Yield one dict per non-blank line; ``.gz`` files are decompressed."""
    p = Path(path)
    opener = gzip.open if p.suffix == ".gz" else open
    with opener(p, "rt", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{p}:{lineno}: invalid JSON: {e}") from e


def load_measurements(path: Union[str, Path]) -> List[Measurement]:
    return [Measurement.model_validate(rec) for rec in iter_ndjson(path)]


def parse_field_literal(raw: str) -> FieldValue:
    """
    Parse a field value written in its wire form.

    ``12i`` -> int, ``true``/``false`` -> bool, ``"text"`` -> str,
    anything float-parsable -> float, otherwise the raw string.
    """
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return raw[1:-1]
    low = raw.lower()
    if low in ("true", "false"):
        return low == "true"
    if raw.endswith("i"):
        try:
            return int(raw[:-1])
        except ValueError:
            pass
    try:
        return float(raw)
    except ValueError:
        return raw


def parse_pairs(items: List[str], what: str = "tag") -> Dict[str, str]:
    """Turn ``["k=v", ...]`` into a dict; the first ``=`` splits key from value."""
    out: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"invalid {what} {item!r}, expected key=value")
        out[key] = value
    return out
