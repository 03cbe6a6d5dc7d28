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

"""Public API return types for vercollate.

This module defines dataclasses for return values from the functions in
vercollate.core and vercollate.validation. All dataclasses are frozen
(immutable) to prevent accidental mutation of return values.

Example:
    Using result types:
        ```python
        from vercollate.core import compare_versions

        result = compare_versions("1.0~rc1", "<", "1.0", preset="rhel")
        print(result.holds)  # True
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like ComparePolicy) stay next to their logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vercollate.versioning import ComparePolicy


@dataclass(frozen=True)
class CompareResult:
    """Result from comparing two versions with an operator.

    Attributes:
        left: Left version as given.
        op: Relational operator (<, <=, =, >=, >).
        right: Right version as given.
        result: Raw signed comparator result (only the sign is meaningful).
        holds: Whether "left op right" is true.
        policy: Policy the comparison ran under.
    """

    left: str
    op: str
    right: str
    result: int
    holds: bool
    policy: ComparePolicy


@dataclass(frozen=True)
class SortResult:
    """Result from sorting versions through an SQLite collation.

    Attributes:
        versions: Versions in collation order.
        collation: Name of the collation used (e.g., "version_rhel").
        reverse: True if sorted descending.
    """

    versions: list[str]
    collation: str
    reverse: bool


@dataclass(frozen=True)
class QueryResult:
    """Result from running one SQL statement.

    Attributes:
        columns: Column names (empty for statements returning no rows).
        rows: Result rows.
    """

    columns: list[str]
    rows: list[tuple[Any, ...]]


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a preset config file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        preset_count: Number of extra presets declared in the file.
        config_path: String path to the validated file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    preset_count: int
    config_path: str
