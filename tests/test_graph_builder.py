"""End-to-end run of the mapper pipeline on local text files."""

import glob
import json
from datetime import datetime

import apache_beam as beam
import pytest

from event_mapper.errors.dlq import WriteDLQ, dlq_to_json
from event_mapper.graph_builder import build_pipeline
from event_mapper.io_connectors.sink_writer import write_sink
from event_mapper.io_connectors.source_factory import read_source


def _read_lines(pattern):
    lines = []
    for path in sorted(glob.glob(pattern)):
        with open(path) as f:
            lines.extend(line for line in f.read().splitlines() if line)
    return lines


def test_build_pipeline_text_to_text(tmp_path, event_mapping) -> None:
    source = tmp_path / "records.jsonl"
    source.write_text("\n".join([
        json.dumps({"message": "hello", "log": {"file": {"path": "/var/log/app.log"}}, "extra": 1}),
        json.dumps({"message": "hi", "host": {"hostname": "h1"}}),
        json.dumps("just a string"),
        "{broken",
    ]) + "\n")

    cfg = {
        "job_mode": "batch",
        "event_mapping": event_mapping,
        "source": {"type": "text", "path": str(source)},
        "sink": {"type": "text", "path": str(tmp_path / "out" / "events")},
        "dlq": {"path": str(tmp_path / "out" / "dlq")},
    }

    with beam.Pipeline() as p:
        build_pipeline(p, cfg)

    events = [json.loads(line) for line in _read_lines(str(tmp_path / "out" / "events*"))]
    assert sorted(events, key=lambda e: e["message"]) == [
        {"message": "hello", "logfile": "/var/log/app.log"},
        {"message": "hi", "serverHost": "h1"},
    ]

    dlq = [json.loads(line) for line in _read_lines(str(tmp_path / "out" / "dlq*"))]
    assert sorted(e["stage"] for e in dlq) == ["decode", "extract"]


def test_build_pipeline_with_value_field(tmp_path) -> None:
    source = tmp_path / "envelopes.jsonl"
    source.write_text(json.dumps({
        "event_id": "e1",
        "payload": json.dumps({"host": {"hostname": "h9"}}),
    }) + "\n")

    cfg = {
        "event_mapping": '{"serverHost": ["host", "hostname"]}',
        "record_value_field": "payload",
        "source": {"type": "text", "path": str(source)},
        "sink": {"type": "text", "path": str(tmp_path / "events")},
        "dlq": {"path": str(tmp_path / "dlq")},
    }

    with beam.Pipeline() as p:
        build_pipeline(p, cfg)

    events = [json.loads(line) for line in _read_lines(str(tmp_path / "events*"))]
    assert events == [{"serverHost": "h9"}]


class TestConnectors:
    def test_unknown_source_type(self) -> None:
        with pytest.raises(ValueError):
            read_source(beam.Pipeline(), {"type": "kafka"})

    def test_pubsub_source_needs_subscription(self) -> None:
        with pytest.raises(ValueError):
            read_source(beam.Pipeline(), {"type": "pubsub"})

    def test_unknown_sink_type(self) -> None:
        p = beam.Pipeline()
        with pytest.raises(ValueError):
            write_sink(p | beam.Create([{}]), {"type": "bigquery"})


class TestDLQ:
    def test_requires_destination(self) -> None:
        with pytest.raises(ValueError):
            WriteDLQ({})

    def test_to_json_stringifies_unknown_types(self) -> None:
        event = {
            "stage": "extract",
            "raw": b"\xffbytes",
            "at": datetime(2024, 1, 2, 3, 4, 5),
            "obj": object,
        }
        decoded = json.loads(dlq_to_json(event))
        assert decoded["at"] == "2024-01-02T03:04:05"
        assert decoded["raw"].endswith("bytes")
        assert decoded["obj"] == "<class 'object'>"
