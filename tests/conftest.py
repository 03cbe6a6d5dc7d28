"""
Pytest configuration and shared fixtures for vercollate tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Any

import pytest
import yaml

from vercollate.binding import register_version_extensions
from vercollate.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after each test (the CLI replaces it)."""
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
    Provide sample preset configuration data.

    Declares one extra preset and makes rhel the default.
    """
    return {
        "apiVersion": "vercollate/v1",
        "default_preset": "rhel",
        "presets": {
            "alpine": {
                "epoch": False,
                "delim_precedence": True,
                "comp_remaining": True,
                "remainder_precedence": True,
            },
        },
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


@pytest.fixture
def conn():
    """
    Provide an in-memory SQLite connection with the version extensions
    registered.
    """
    connection = sqlite3.connect(":memory:")
    register_version_extensions(connection)
    yield connection
    connection.close()


@pytest.fixture
def versions_table(conn: sqlite3.Connection):
    """
    Factory fixture that fills a 'pkgs' table with the given versions.

    Usage:
        versions_table(["1.0", "2.0"])
    """

    def _fill(versions: list[str]) -> sqlite3.Connection:
        conn.execute("CREATE TABLE IF NOT EXISTS pkgs (v TEXT)")
        conn.execute("DELETE FROM pkgs")
        conn.executemany("INSERT INTO pkgs (v) VALUES (?)", [(v,) for v in versions])
        return conn

    return _fill
