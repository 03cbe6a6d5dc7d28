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

"""Exception hierarchy for vercollate.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ArgumentError: Wrong number or type of version_compare() arguments
- OperatorError: Unknown comparison operator passed to version_compare()
- OptionError: A policy option that is not an integer or NULL
- ConfigError: Configuration-related errors (YAML parse, unknown presets)

The first three share the PredicateError base because they are all raised
while validating a version_compare() call, before any comparison work is
done. All exceptions inherit from VercollateError, allowing users to catch
every vercollate error with a single except clause if needed.

Example:
    Catching predicate errors:
        ```python
        from vercollate.binding import version_compare_func
        from vercollate.exceptions import OperatorError

        try:
            version_compare_func("1.0", "??", "2.0")
        except OperatorError as e:
            print(f"Bad operator: {e}")
        ```

Note:
    When the predicate is called from SQL, SQLite reports any exception
    raised by the callback as sqlite3.OperationalError.
"""

from __future__ import annotations

__all__ = [
    "VercollateError",
    "PredicateError",
    "ArgumentError",
    "OperatorError",
    "OptionError",
    "ConfigError",
]


class VercollateError(Exception):
    """Base exception for all vercollate errors."""

    pass


class PredicateError(VercollateError):
    """Base class for errors raised while validating predicate arguments."""

    pass


class ArgumentError(PredicateError):
    """Raised when version_compare() receives the wrong argument shape.

    This exception is raised when:

    - Fewer than three arguments are given
    - The left version, operator or right version is not text
    """

    pass


class OperatorError(PredicateError):
    """Raised when the comparison operator is not one of <, <=, =, >=, >."""

    pass


class OptionError(PredicateError):
    """Raised when a trailing policy option is neither an integer nor NULL."""

    pass


class ConfigError(VercollateError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing or invalid configuration fields
    - Preset names that are unknown or shadow a built-in preset

    Example:
        Catching configuration errors:
            ```python
            from pathlib import Path
            from vercollate.config import load_config
            from vercollate.exceptions import ConfigError

            try:
                config = load_config(Path("presets.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass
