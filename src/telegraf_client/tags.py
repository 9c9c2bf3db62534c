"""
Implicit-tag injection.

A client holds one implicit-tag mapping. Default tags and the routing tag are
both expressed as that mapping; the routing variant is simply a one-entry map
keyed by ``ROUTING_TAG_KEY``.

Merge rule: an implicit tag is added only when the point does not already
carry that key. Explicit values always win.
"""

from __future__ import annotations

from typing import Mapping, Optional

from .models import Measurement

ROUTING_TAG_KEY = "database"


def routing_tags(value: str, key: str = ROUTING_TAG_KEY) -> dict[str, str]:
    """One-entry implicit map that routes every point to ``value``."""
    return {key: value}


def merge_tags(*sources: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Combine implicit-tag sources into one map; later sources win."""
    merged: dict[str, str] = {}
    for src in sources:
        if src:
            merged.update(src)
    return merged


def inject(m: Measurement, implicit_tags: Optional[Mapping[str, str]]) -> Measurement:
    """Return ``m`` with absent implicit tags added.

    The caller's measurement is never modified; when nothing is added the
    same instance is returned.
    """
    if not implicit_tags:
        return m
    missing = {k: v for k, v in implicit_tags.items() if k not in m.tags}
    if not missing:
        return m
    return m.model_copy(update={"tags": {**m.tags, **missing}})
