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

"""Logging interface for vercollate.

Library modules report progress through a small logger object instead of
printing directly, so that `vercollate sort` and `vercollate query` can keep
stdout reserved for their results. Diagnostic output goes to stderr.

Output levels:

- Verbose: Only printed when verbose mode is enabled
- Debug: Only printed when debug mode is enabled (implies verbose)

Prefixes used across the package are SQLITE, CONFIG, COMPARE, SORT and
QUERY.

Example:
    Configure the global logger:
        ```python
        from vercollate.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Inject a logger into a library call:
        ```python
        import sqlite3
        from vercollate.binding import register_version_extensions
        from vercollate.logging import get_logger

        conn = sqlite3.connect(":memory:")
        register_version_extensions(conn, logger=get_logger(debug=True))
        ```

Note:
    The default global logger is silent. The CLI configures it from the
    --verbose and --debug flags.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "CONFIG", "SORT").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "SQLITE", "QUERY").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that writes to a text stream (stderr unless told otherwise)."""

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
            stream: Destination stream. Resolved to sys.stderr at write
                time when omitted, so pytest's capsys sees the output.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream or sys.stderr)

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that suppresses all output."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a stderr logger with the given verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A DefaultLogger configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def set_global_logger(logger: Logger) -> None:
    """Replace the process-wide logger.

    Args:
        logger: Logger instance used by library functions that are not
            given an explicit logger.
    """
    global _global_logger
    _global_logger = logger


def resolve_logger(logger: Logger | None) -> Logger:
    """Return logger if given, else the global logger."""
    return logger if logger is not None else _global_logger
