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

"""Command-line interface for vercollate.

Commands:

    compare: Evaluate "LEFT OP RIGHT" and print true/false
    sort: Sort versions through an SQLite collation
    query: Run one SQL statement with version_compare() and collations
    validate: Validate a preset config file
    presets: List built-in and configured presets

Example:
    Compare two rpm versions:
        ```bash
        $ vercollate compare 1.0~rc1 '<' 1.0 --preset rhel
        true
        ```

    Sort Debian versions:
        ```bash
        $ vercollate sort 1.0-1 1:0.9 1.0~rc1 --preset dpkg
        ```

    Query with a collation:
        ```bash
        $ vercollate query "SELECT version_compare('1.0', '>=', '1.0')"
        1
        ```

Exit Codes:

- 0: Success (for compare: the relation holds)
- 1: compare: the relation does not hold; validate: config is invalid
- 2: Error (bad arguments, configuration or SQL failure)

Note:
    Results go to stdout. Verbose and debug messages go to stderr so output
    can be piped. Verbose mode shows full tracebacks on errors.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sqlite3
import sys
import traceback

from vercollate.binding import collation_name
from vercollate.config import VercollateConfig, find_config, load_config
from vercollate.core import compare_versions, query, sort_versions
from vercollate.exceptions import VercollateError
from vercollate.logging import get_logger, set_global_logger
from vercollate.validation import validate_config
from vercollate.versioning import OPTION_NAMES, ComparePolicy

EXIT_OK = 0
EXIT_FALSE = 1
EXIT_ERROR = 2


def _configure_logging(args: argparse.Namespace) -> None:
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))


def _load_effective_config(args: argparse.Namespace) -> VercollateConfig:
    config_path = args.config if args.config is not None else find_config()
    return load_config(config_path)


def _report_error(args: argparse.Namespace, err: Exception) -> int:
    print(f"Error: {err}", file=sys.stderr)
    if args.verbose or args.debug:
        traceback.print_exc()
    return EXIT_ERROR


def _policy_from_flags(args: argparse.Namespace) -> ComparePolicy | None:
    flags = {name: getattr(args, name) for name in OPTION_NAMES}
    if not any(flags.values()):
        return None
    return ComparePolicy(**flags)


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'vercollate compare' command.

    Explicit switch flags (--epoch etc.) build an ad-hoc policy and cannot
    be combined with --preset.

    Returns:
        0 if the relation holds, 1 if it does not, 2 on error.
    """
    _configure_logging(args)

    try:
        policy = _policy_from_flags(args)
        if policy is not None and args.preset:
            raise VercollateError("--preset cannot be combined with option flags")
        config = _load_effective_config(args)
        result = compare_versions(
            args.left,
            args.op,
            args.right,
            preset=args.preset,
            policy=policy,
            config=config,
        )
    except VercollateError as err:
        return _report_error(args, err)

    print("true" if result.holds else "false")
    return EXIT_OK if result.holds else EXIT_FALSE


def cmd_sort(args: argparse.Namespace) -> int:
    """Handler for 'vercollate sort' command.

    Reads versions from the command line, or one per line from stdin when
    none are given.
    """
    _configure_logging(args)

    versions = args.versions
    if not versions:
        versions = [line.strip() for line in sys.stdin if line.strip()]

    try:
        config = _load_effective_config(args)
        result = sort_versions(
            versions, preset=args.preset, config=config, reverse=args.reverse
        )
    except (VercollateError, sqlite3.Error) as err:
        return _report_error(args, err)

    for v in result.versions:
        print(v)
    return EXIT_OK


def cmd_query(args: argparse.Namespace) -> int:
    """Handler for 'vercollate query' command.

    Prints a header row when --header is given, then one tab-separated
    line per result row. NULL prints as an empty field.
    """
    _configure_logging(args)

    try:
        config = _load_effective_config(args)
        result = query(args.sql, db_path=args.db, config=config)
    except (VercollateError, sqlite3.Error) as err:
        return _report_error(args, err)

    if args.header and result.columns:
        print("\t".join(result.columns))
    for row in result.rows:
        print("\t".join("" if v is None else str(v) for v in row))
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'vercollate validate' command.

    Returns:
        0 for a valid config, 1 for an invalid one.
    """
    _configure_logging(args)

    config_path = Path(args.config_file).resolve()
    result = validate_config(config_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config:      {result.config_path}")
    print(f"Status:      {result.status.upper()}")
    print(f"Presets:     {result.preset_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Config is valid!")
        return EXIT_OK
    print()
    print(f"[FAILED] Config validation failed with {len(result.errors)} error(s).")
    return EXIT_FALSE


def cmd_presets(args: argparse.Namespace) -> int:
    """Handler for 'vercollate presets' command."""
    _configure_logging(args)

    try:
        config = _load_effective_config(args)
    except VercollateError as err:
        return _report_error(args, err)

    for name, policy in config.all_presets().items():
        marker = "*" if name == config.default_preset else " "
        print(f"{marker} {name:<12} {collation_name(name):<20} {policy.describe()}")
    return EXIT_OK


def _add_common_flags(parser: argparse.ArgumentParser, *, config: bool = True) -> None:
    if config:
        parser.add_argument(
            "--config",
            type=Path,
            default=None,
            help="Preset config file (default: nearest vercollate.yaml, if any)",
        )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates on stderr",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _package_version() -> str:
    try:
        return version("vercollate")
    except PackageNotFoundError:
        from vercollate import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the vercollate CLI."""
    parser = argparse.ArgumentParser(
        prog="vercollate",
        description="Package-manager style version comparison for SQLite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"vercollate {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Evaluate LEFT OP RIGHT and print true/false",
        description="Compare two versions. Exit status is 0 when the relation holds.",
    )
    parser_compare.add_argument("left", help="Left version string")
    parser_compare.add_argument(
        "op", help="Comparison operator: <, <=, =, >=, > (quote it in the shell)"
    )
    parser_compare.add_argument("right", help="Right version string")
    parser_compare.add_argument(
        "--preset",
        type=str.lower,
        default=None,
        help="Preset name: generic, arch, dpkg, rhel or one from the config",
    )
    for name in OPTION_NAMES:
        parser_compare.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            action="store_true",
            help=f"Enable the {name} switch",
        )
    _add_common_flags(parser_compare)
    parser_compare.set_defaults(func=cmd_compare)

    # 'sort' command
    parser_sort = subparsers.add_parser(
        "sort",
        help="Sort versions using a version collation",
        description="Sort versions with ORDER BY ... COLLATE. Reads stdin if no versions are given.",
    )
    parser_sort.add_argument("versions", nargs="*", help="Versions to sort")
    parser_sort.add_argument(
        "--preset",
        type=str.lower,
        default=None,
        help="Preset name (default: from config, else generic)",
    )
    parser_sort.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Sort newest first",
    )
    _add_common_flags(parser_sort)
    parser_sort.set_defaults(func=cmd_sort)

    # 'query' command
    parser_query = subparsers.add_parser(
        "query",
        help="Run an SQL statement with the version extensions registered",
        description="Execute one SQL statement and print the rows tab-separated.",
    )
    parser_query.add_argument("sql", help="SQL statement to run")
    parser_query.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database file (default: in-memory)",
    )
    parser_query.add_argument(
        "--header",
        action="store_true",
        help="Print column names first",
    )
    _add_common_flags(parser_query)
    parser_query.set_defaults(func=cmd_query)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a preset config file",
        description="Check a vercollate YAML config for syntax and preset errors.",
    )
    parser_validate.add_argument("config_file", help="Path to the config YAML file")
    _add_common_flags(parser_validate, config=False)
    parser_validate.set_defaults(func=cmd_validate)

    # 'presets' command
    parser_presets = subparsers.add_parser(
        "presets",
        help="List available presets and their collation names",
        description="List built-in and configured presets. '*' marks the default.",
    )
    _add_common_flags(parser_presets)
    parser_presets.set_defaults(func=cmd_presets)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the vercollate CLI.

    This function is registered as the 'vercollate' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
