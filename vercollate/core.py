# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""High-level operations for vercollate.

This module ties the comparator, the SQLite bindings and the config layer
together. It backs the CLI commands and is the entry point for programmatic
use.

Functions:

- compare_versions: Evaluate "left op right" under a preset or policy
- sort_versions: Sort versions with an ORDER BY ... COLLATE query
- open_connection: sqlite3 connection with the extensions registered
- query: Run one SQL statement on such a connection

Example:
    Sort Debian-style versions:
        ```python
        from vercollate.core import sort_versions

        result = sort_versions(["1.0-1", "1.0~rc1-1", "1:0.9"], preset="dpkg")
        print(result.versions)
        ```

"""

from __future__ import annotations

from contextlib import closing
from pathlib import Path
import sqlite3
from typing import Any, Iterable, Sequence

from vercollate.binding import (
    OPERATORS,
    collation_name,
    evaluate_operator,
    register_version_extensions,
)
from vercollate.config import VercollateConfig
from vercollate.exceptions import OperatorError
from vercollate.logging import Logger, resolve_logger
from vercollate.results import CompareResult, QueryResult, SortResult
from vercollate.versioning import ComparePolicy, version_compare

__all__ = ["compare_versions", "sort_versions", "open_connection", "query"]


def _preset_key(config: VercollateConfig, preset: str | None) -> str:
    key = (preset or config.default_preset).lower()
    config.resolve_preset(key)  # raises ConfigError for unknown names
    return key


def compare_versions(
    left: str,
    op: str,
    right: str,
    *,
    preset: str | None = None,
    policy: ComparePolicy | None = None,
    config: VercollateConfig | None = None,
    logger: Logger | None = None,
) -> CompareResult:
    """Evaluate "left op right".

    An explicit policy takes priority over preset. With neither, the
    config's default preset is used.

    Raises:
        OperatorError: If op is not one of <, <=, =, >=, >.
        ConfigError: If preset is unknown.
    """
    logger = resolve_logger(logger)
    if not isinstance(op, str) or op not in OPERATORS:
        raise OperatorError(
            f"Unknown compare operator {op!r}. Must provide one of the "
            "following: (<, <=, =, >=, >)"
        )
    config = config or VercollateConfig()
    if policy is None:
        policy = config.resolve_preset(preset)

    rc = version_compare(left, right, policy)
    holds = evaluate_operator(rc, op)
    logger.verbose(
        "COMPARE",
        f"{left!r} {op} {right!r} -> {holds} (result={rc}, {policy.describe()})",
    )
    return CompareResult(
        left=left, op=op, right=right, result=rc, holds=holds, policy=policy
    )


def open_connection(
    db_path: Path | str | None = None,
    *,
    config: VercollateConfig | None = None,
    logger: Logger | None = None,
) -> sqlite3.Connection:
    """Open an sqlite3 connection with the version extensions registered.

    Args:
        db_path: Database file. None opens an in-memory database.
        config: Supplies extra presets to register as collations.
        logger: Logger for registration messages.

    Returns:
        The open connection. The caller closes it.
    """
    config = config or VercollateConfig()
    conn = sqlite3.connect(":memory:" if db_path is None else str(db_path))
    try:
        register_version_extensions(
            conn, extra_presets=config.presets, logger=logger
        )
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def sort_versions(
    versions: Iterable[str],
    *,
    preset: str | None = None,
    config: VercollateConfig | None = None,
    reverse: bool = False,
    logger: Logger | None = None,
) -> SortResult:
    """Sort versions using the collation registered for preset.

    The sort runs inside SQLite so the result matches what ORDER BY
    produces in user queries.

    Raises:
        ConfigError: If preset is unknown.
    """
    logger = resolve_logger(logger)
    config = config or VercollateConfig()
    name = collation_name(_preset_key(config, preset))
    items = list(versions)
    direction = "DESC" if reverse else "ASC"

    logger.verbose("SORT", f"Sorting {len(items)} version(s) with {name} {direction}")
    with closing(open_connection(config=config, logger=logger)) as conn:
        conn.execute("CREATE TEMP TABLE versions (v TEXT NOT NULL)")
        conn.executemany("INSERT INTO versions (v) VALUES (?)", [(v,) for v in items])
        rows = conn.execute(
            f"SELECT v FROM versions ORDER BY v COLLATE {name} {direction}"
        ).fetchall()

    return SortResult(versions=[r[0] for r in rows], collation=name, reverse=reverse)


def query(
    sql: str,
    params: Sequence[Any] = (),
    *,
    db_path: Path | str | None = None,
    config: VercollateConfig | None = None,
    logger: Logger | None = None,
) -> QueryResult:
    """Run one SQL statement with the version extensions available.

    Changes to a file database are committed.

    Raises:
        sqlite3.Error: On SQL errors, including errors raised by
            version_compare().
    """
    logger = resolve_logger(logger)
    logger.debug("QUERY", sql)
    with closing(open_connection(db_path, config=config, logger=logger)) as conn:
        with conn:
            cursor = conn.execute(sql, params)
            rows = cursor.fetchall()
            columns = [d[0] for d in cursor.description or ()]
    logger.verbose("QUERY", f"{len(rows)} row(s)")
    return QueryResult(columns=columns, rows=rows)
