"""
vercollate - package-manager version ordering for SQLite

vercollate compares software and package version strings ("1.2.0-rc1",
"2:4.14.1", "1.0~beta2") the way different packaging ecosystems order
them, and exposes that comparison to SQL as a scalar function and a set of
collations.

vercollate provides:
  - A byte-level comparator with four policy switches
  - generic, arch, dpkg and rhel presets
  - version_compare() SQL function and version/version_arch/version_dpkg/
    version_rhel collations for sqlite3 connections
  - Extra presets declared in a YAML config file
  - A small CLI for comparing, sorting and querying

Quick Start
-----------
Compare two versions:

    $ vercollate compare 1.0~rc1 '<' 1.0 --preset rhel

Use the collations from Python:

    import sqlite3
    from vercollate import register_version_extensions

    conn = sqlite3.connect(":memory:")
    register_version_extensions(conn)
    conn.execute("SELECT v FROM pkgs ORDER BY v COLLATE version_dpkg")

Package Structure
-----------------
versioning : package
    Pure comparator and comparison policies.
binding : module
    sqlite3 function and collation callbacks, registration.
config : package
    YAML preset configuration.
core : module
    High-level compare/sort/query helpers.
cli : module
    Command-line interface with argparse.

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"
__description__ = "Package-manager style version comparison and collations for SQLite"

# Re-export commonly used functions for convenience
from vercollate.binding import register_version_extensions, version_compare_func
from vercollate.config import load_config
from vercollate.core import compare_versions, query, sort_versions
from vercollate.validation import validate_config
from vercollate.versioning import (
    ComparePolicy,
    get_preset,
    version_compare,
    version_key,
)

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "ComparePolicy",
    "get_preset",
    "version_compare",
    "version_key",
    "version_compare_func",
    "register_version_extensions",
    "load_config",
    "validate_config",
    "compare_versions",
    "sort_versions",
    "query",
]
