"""
Unit tests for NDJSON loading and command-line literal parsing.
"""

import gzip
import json

import pytest

from telegraf_client.utils import iter_ndjson, load_measurements, parse_field_literal, parse_pairs


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12i", 12),
        ("-3i", -3),
        ("1.5", 1.5),
        ("42", 42.0),
        ("true", True),
        ("FALSE", False),
        ('"12i"', "12i"),
        ('"true"', "true"),
        ("idle", "idle"),
        ("hi", "hi"),
    ],
)
def test_parse_field_literal(raw, expected):
    value = parse_field_literal(raw)
    assert value == expected
    assert type(value) is type(expected)


def test_parse_pairs_splits_on_first_equals():
    assert parse_pairs(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}


@pytest.mark.parametrize("item", ["novalue", "=v"])
def test_parse_pairs_rejects_malformed(item):
    with pytest.raises(ValueError, match="expected key=value"):
        parse_pairs([item], "tag")


def _records():
    return [
        {"name": "cpu", "tags": {"host": "a"}, "fields": {"usage": 1.5}, "timestamp": 7},
        {"name": "mem", "fields": {"free": 3}},
    ]


def test_iter_ndjson_plain(tmp_path):
    p = tmp_path / "points.ndjson"
    p.write_text("\n".join(json.dumps(r) for r in _records()) + "\n\n")
    assert list(iter_ndjson(p)) == _records()


def test_iter_ndjson_gzip(tmp_path):
    p = tmp_path / "points.ndjson.gz"
    with gzip.open(p, "wt", encoding="utf-8") as f:
        for r in _records():
            f.write(json.dumps(r) + "\n")
    assert list(iter_ndjson(p)) == _records()


def test_iter_ndjson_bad_line(tmp_path):
    p = tmp_path / "bad.ndjson"
    p.write_text('{"name": "cpu"}\n{oops\n')
    with pytest.raises(ValueError, match=":2: invalid JSON"):
        list(iter_ndjson(p))


def test_load_measurements(tmp_path):
    p = tmp_path / "points.ndjson"
    p.write_text("\n".join(json.dumps(r) for r in _records()))
    cpu, mem = load_measurements(p)
    assert cpu.tags == {"host": "a"} and cpu.timestamp == 7
    assert mem.fields == {"free": 3} and type(mem.fields["free"]) is int
