"""
Pytest configuration and shared fixtures for appbasis tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from appbasis.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Keep the global logger silent between tests (the CLI replaces it)."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """
    Provide sample configuration data.

    Mixes nested mappings, scalars of every type and a list.
    """
    return {
        "name": "sample app",
        "server": {
            "host": "localhost",
            "port": 8080,
            "debug": False,
            "timeout": 2.5,
        },
        "paths": {
            "data": {"root": "/var/lib/sample", "cache": "/var/cache/sample"},
        },
        "plugins": ["alpha", "beta", {"name": "gamma", "enabled": True}],
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


class RecordingLogger:
    """Logger that keeps every message for later assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str, str]] = []

    def verbose(self, prefix: str, message: str) -> None:
        self.messages.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.messages.append(("debug", prefix, message))

    def warning(self, prefix: str, message: str) -> None:
        self.messages.append(("warning", prefix, message))

    def of_kind(self, kind: str) -> list[str]:
        return [msg for k, _, msg in self.messages if k == kind]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that records messages instead of printing them."""
    return RecordingLogger()
