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

"""SQLite bindings for version comparison.

This module exposes the comparator to SQL through Python's sqlite3 module:

- version_compare(left, op, right, [epoch], [delim_precedence],
  [comp_remaining], [remainder_precedence]) scalar function returning 1/0
- version, version_arch, version_dpkg and version_rhel collations

Nothing is registered at import time. Call register_version_extensions()
once per connection.

Example:
    Register and query:
        ```python
        import sqlite3
        from vercollate.binding import register_version_extensions

        conn = sqlite3.connect(":memory:")
        register_version_extensions(conn)
        conn.execute("SELECT version_compare('1.0', '<', '2.0')").fetchone()
        # (1,)
        conn.execute(
            "SELECT v FROM pkgs ORDER BY v COLLATE version_rhel"
        )
        ```

Note:
    Exceptions raised by version_compare_func() reach SQL callers as
    sqlite3.OperationalError. Call it directly to get the typed error.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Callable, Mapping

from vercollate.exceptions import ArgumentError, ConfigError, OperatorError
from vercollate.logging import Logger, resolve_logger
from vercollate.versioning import PRESETS, ComparePolicy, version_compare

__all__ = [
    "OPERATORS",
    "FUNCTION_NAME",
    "COLLATION_NAMES",
    "collation_name",
    "evaluate_operator",
    "version_compare_func",
    "make_collation",
    "register_version_extensions",
]

OPERATORS = frozenset({"<", "<=", "=", ">=", ">"})

FUNCTION_NAME = "version_compare"

# Preset name -> collation name. The generic preset keeps the bare name.
COLLATION_NAMES: dict[str, str] = {
    "generic": "version",
    "arch": "version_arch",
    "dpkg": "version_dpkg",
    "rhel": "version_rhel",
}

_ARGUMENT_MESSAGE = "Must provide two version strings and an operator to compare."


def collation_name(preset: str) -> str:
    """Return the SQL collation name registered for preset."""
    return COLLATION_NAMES.get(preset, f"version_{preset}")


def evaluate_operator(rc: int, op: str) -> bool:
    """Map a comparison result onto a relational operator."""
    if rc < 0:
        return op[0] == "<"
    if rc > 0:
        return op[0] == ">"
    return op == "=" or len(op) == 2


def version_compare_func(*args: Any) -> int:
    """Scalar SQL function: version_compare(left, op, right, [options...]).

    Args:
        *args: Left version, operator and right version (all text),
            followed by up to four optional integer/NULL policy switches
            in the order epoch, delim_precedence, comp_remaining,
            remainder_precedence. Extra arguments are ignored.

    Returns:
        1 if "left op right" holds, else 0.

    Raises:
        ArgumentError: Fewer than three arguments, or a non-text version or
            operator.
        OperatorError: The operator is not one of <, <=, =, >=, >.
        OptionError: A policy switch is not an integer or NULL.
    """
    if len(args) < 3:
        raise ArgumentError(_ARGUMENT_MESSAGE)

    left, op, right = args[0], args[1], args[2]
    if not (isinstance(left, str) and isinstance(op, str) and isinstance(right, str)):
        raise ArgumentError(_ARGUMENT_MESSAGE)

    if op not in OPERATORS:
        raise OperatorError(
            "Unknown compare operator. Must provide one of the "
            "following: (<, <=, =, >=, >)"
        )

    policy = ComparePolicy.from_options(*args[3:])
    rc = version_compare(left, right, policy)
    return int(evaluate_operator(rc, op))


def make_collation(policy: ComparePolicy) -> Callable[[str, str], int]:
    """Return an SQLite collation callback ordering text under policy."""

    def _collate(left: str, right: str) -> int:
        return version_compare(left, right, policy)

    return _collate


collate_generic = make_collation(PRESETS["generic"])
collate_arch = make_collation(PRESETS["arch"])
collate_dpkg = make_collation(PRESETS["dpkg"])
collate_rhel = make_collation(PRESETS["rhel"])

_BUILTIN_COLLATIONS: dict[str, Callable[[str, str], int]] = {
    "generic": collate_generic,
    "arch": collate_arch,
    "dpkg": collate_dpkg,
    "rhel": collate_rhel,
}


def register_version_extensions(
    connection: sqlite3.Connection,
    *,
    extra_presets: Mapping[str, ComparePolicy] | None = None,
    logger: Logger | None = None,
) -> tuple[str, ...]:
    """Register version_compare() and the version collations on connection.

    Calling this again on the same connection re-registers identical
    callbacks, leaving the connection in the same state.

    Args:
        connection: Open sqlite3 connection.
        extra_presets: Additional named policies; each is registered as a
            collation called version_<name>.
        logger: Logger for registration messages. Defaults to the global
            logger.

    Returns:
        The collation names registered, built-ins first.

    Raises:
        ConfigError: If an extra preset reuses a built-in preset or
            collation name.
    """
    logger = resolve_logger(logger)
    extra_presets = dict(extra_presets or {})

    # SQLite collation names are case-insensitive.
    builtin_names = {n.lower() for n in COLLATION_NAMES.values()}
    for preset in extra_presets:
        name = collation_name(preset).lower()
        if preset.lower() in PRESETS or name in builtin_names:
            raise ConfigError(f"Cannot redefine built-in preset '{preset}'")

    connection.create_function(
        FUNCTION_NAME, -1, version_compare_func, deterministic=True
    )
    logger.debug("SQLITE", f"Registered function: {FUNCTION_NAME}")

    registered: list[str] = []
    for preset, callback in _BUILTIN_COLLATIONS.items():
        name = COLLATION_NAMES[preset]
        connection.create_collation(name, callback)
        registered.append(name)
        logger.debug("SQLITE", f"Registered collation: {name}")

    for preset, policy in extra_presets.items():
        name = collation_name(preset)
        connection.create_collation(name, make_collation(policy))
        registered.append(name)
        logger.debug(
            "SQLITE", f"Registered collation: {name} ({policy.describe()})"
        )

    logger.verbose(
        "SQLITE",
        f"Registered {FUNCTION_NAME}() and {len(registered)} collation(s)",
    )
    return tuple(registered)
