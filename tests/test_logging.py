"""
Tests for vercollate.logging module.

Tests the logger implementations including:
- Verbose/debug gating on DefaultLogger
- Output destination (stderr by default, never stdout)
- Global logger configuration and resolution
"""

from __future__ import annotations

import io

import vercollate.logging as vlog
from vercollate.logging import (
    DefaultLogger,
    SilentLogger,
    get_logger,
    resolve_logger,
    set_global_logger,
)


class TestDefaultLogger:
    """Tests for DefaultLogger."""

    def test_quiet_by_default(self):
        """Test that verbose and debug messages are dropped by default."""
        stream = io.StringIO()
        logger = DefaultLogger(stream=stream)
        logger.verbose("SORT", "hidden")
        logger.debug("SQLITE", "hidden")
        assert stream.getvalue() == ""

    def test_debug_implies_verbose(self):
        """Test that debug mode also prints verbose messages."""
        stream = io.StringIO()
        logger = DefaultLogger(debug=True, stream=stream)
        logger.verbose("CONFIG", "loaded")
        logger.debug("SQLITE", "registered")
        assert stream.getvalue() == "[CONFIG] loaded\n[SQLITE] registered\n"

    def test_writes_to_stderr(self, capsys):
        """Test that diagnostics go to stderr and leave stdout clean."""
        get_logger(verbose=True).verbose("QUERY", "running")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "[QUERY] running\n"

    def test_level_methods_only(self):
        """Test that loggers expose exactly the verbose and debug levels."""
        for logger in (DefaultLogger(), SilentLogger()):
            assert callable(logger.verbose)
            assert callable(logger.debug)
            assert not hasattr(logger, "step")


class TestGlobalLogger:
    """Tests for set_global_logger and resolve_logger."""

    def test_default_is_silent(self):
        """Test that library calls are silent until configured."""
        assert isinstance(resolve_logger(None), SilentLogger)

    def test_set_global_logger(self):
        """Test that resolve_logger falls back to the configured logger."""
        logger = DefaultLogger()
        set_global_logger(logger)
        assert resolve_logger(None) is logger

    def test_explicit_logger_wins(self):
        """Test that an explicit logger is returned unchanged."""
        set_global_logger(DefaultLogger())
        explicit = SilentLogger()
        assert resolve_logger(explicit) is explicit

    def test_no_global_getter(self):
        """Test that resolve_logger is the only way to read the global logger."""
        assert not hasattr(vlog, "get_global_logger")
