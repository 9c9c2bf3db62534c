"""
Line-protocol encoder.

Renders a Measurement as one line of the collector's text wire format:

    <name>[,<tag_key>=<tag_value>]* <field_key>=<field_value>[,...] [<timestamp>]

Tags and fields are emitted in lexicographic key order so output is stable.
Field literals: integers ``12i``, floats via ``repr`` (``64.5``, ``1e+20``),
booleans ``true``/``false``, strings double-quoted.
"""

from __future__ import annotations

import math
from typing import Iterable

from .errors import EncodeError
from .models import Measurement

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_KEY_ESCAPE = str.maketrans({",": r"\,", "=": r"\=", " ": r"\ "})
_STR_ESCAPE = str.maketrans({'"': r"\"", "\\": r"\\"})


def escape_key(s: str) -> str:
    """Escape a measurement name, tag key, tag value or field key."""
    return s.translate(_KEY_ESCAPE)


def escape_string(s: str) -> str:
    """Escape and quote a string field value."""
    return '"' + s.translate(_STR_ESCAPE) + '"'


def format_field_value(key: str, value) -> str:
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise EncodeError(f"field {key!r}: integer {value} out of int64 range")
        return f"{value}i"
    if isinstance(value, float):
        if not math.isfinite(value):
            raise EncodeError(f"field {key!r}: non-finite float {value!r}")
        return repr(value)
    if isinstance(value, str):
        return escape_string(value)
    raise EncodeError(f"field {key!r}: unsupported value type {type(value).__name__}")


def _token(s: str, what: str) -> str:
    # newlines end the line; a trailing backslash would swallow the next delimiter
    if "\n" in s or "\r" in s:
        raise EncodeError(f"{what} {s!r} contains a line break")
    if s.endswith("\\"):
        raise EncodeError(f"{what} {s!r} ends with a backslash")
    return escape_key(s)


def _pairs(mapping: dict, kind: str) -> list[tuple[str, object]]:
    out = []
    for k in sorted(mapping):
        if not k:
            raise EncodeError(f"empty {kind} key")
        out.append((k, mapping[k]))
    return out


def encode(m: Measurement) -> str:
    """Render ``m`` as a single line, without the trailing newline."""
    if not m.name:
        raise EncodeError("measurement name is empty")
    if not m.fields:
        raise EncodeError(f"measurement {m.name!r} has no fields")

    parts = [_token(m.name, "name")]
    for k, v in _pairs(m.tags, "tag"):
        parts.append(f",{_token(k, 'tag key')}={_token(v, 'tag value')}")

    parts.append(" ")
    parts.append(
        ",".join(f"{_token(k, 'field key')}={format_field_value(k, v)}" for k, v in _pairs(m.fields, "field"))
    )

    if m.timestamp is not None:
        parts.append(f" {m.timestamp}")
    return "".join(parts)


def encode_batch(measurements: Iterable[Measurement]) -> str:
    """Newline-joined lines with a trailing newline; empty input gives ``""``."""
    lines = [encode(m) for m in measurements]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
