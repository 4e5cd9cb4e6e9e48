"""
Pytest configuration and fixtures for event mapper tests.
"""

import json

import pytest


@pytest.fixture
def event_mapping() -> dict:
    return {
        "message": ["message"],
        "logfile": ["log", "file", "path"],
        "serverHost": ["host", "hostname"],
    }


@pytest.fixture
def event_mapping_json(event_mapping) -> str:
    return json.dumps(event_mapping)


@pytest.fixture
def full_record() -> dict:
    return {
        "message": "hello",
        "log": {"file": {"path": "/var/log/app.log"}},
        "host": {"hostname": "h1"},
        "extra": "ignored",
    }


@pytest.fixture
def config_yaml(tmp_path):
    """Write a mapper config to tmp_path and return its path."""

    def _write(text: str) -> str:
        path = tmp_path / "mapper.yaml"
        path.write_text(text)
        return str(path)

    return _write
