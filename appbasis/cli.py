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

"""Command-line interface for appbasis.

This module provides the `appbasis` command, a thin shell over the Config
store for reading and editing YAML config files.

Commands:

    get: Print the value at a path
    set: Store a value at a path
    delete: Remove a path
    show: Dump the whole file, or a subtree, as YAML

Example:
    Set and read back a value:
        ```bash
        $ appbasis set settings.yaml server/port 8080
        $ appbasis get settings.yaml server.port
        8080
        ```

    Remove a setting:
        ```bash
        $ appbasis delete settings.yaml server:port
        ```

    Dump a subtree:
        ```bash
        $ appbasis show settings.yaml /server
        ```

Exit Codes:

- 0: Success
- 1: Error (unreadable file, write failure, or path not set)

Note:
    VALUE arguments are parsed as YAML, so `8080` is stored as an integer,
    `true` as a boolean and `[a, b]` as a list. Quote the value to force a
    string: `'"8080"'`.

    Files are loaded with die_on_error so a damaged file is reported
    instead of being overwritten with an empty tree.

"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from appbasis import __version__
from appbasis.config import Config, join_path, resolve_path
from appbasis.exceptions import AppBasisError, ConfigError
from appbasis.logging import get_logger, set_global_logger


def _format_value(value: Any) -> str:
    """Render a value for terminal output."""
    if isinstance(value, (dict, list)):
        return yaml.safe_dump(
            value, default_flow_style=False, sort_keys=False, allow_unicode=True
        ).rstrip("\n")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        import traceback

        traceback.print_exc()
    return 1


def _open_config(args: argparse.Namespace) -> Config:
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)
    return Config(args.file, die_on_error=True, strict=args.strict, logger=logger)


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'appbasis get' command.

    Prints the value at the given path. Mappings and lists are printed as
    YAML.

    Returns:
        Exit code (0 if the path is set, 1 if not or on error).

    """
    try:
        cfg = _open_config(args)
    except AppBasisError as err:
        return _report_error(err, args)

    value = cfg.get(args.path)
    if value is None:
        print(f"Error: {join_path(resolve_path(args.path))} is not set")
        return 1

    print(_format_value(value))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    """Handler for 'appbasis set' command.

    Parses VALUE as YAML, stores it at the given path and writes the file
    if the value changed.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        value = yaml.safe_load(args.value)
    except yaml.YAMLError as err:
        return _report_error(ConfigError(f"cannot parse value: {err}"), args)

    if value is None:
        print("Error: value is empty; use 'appbasis delete' to remove a path")
        return 1

    try:
        cfg = _open_config(args)
        cfg.set(args.path, value)
        written = cfg.store()
    except AppBasisError as err:
        return _report_error(err, args)

    where = join_path(resolve_path(args.path))
    if written:
        print(f"[SUCCESS] {where} updated in {cfg.filename}")
    else:
        print(f"{where} already set to that value, nothing written")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Handler for 'appbasis delete' command.

    Removes the path (and any parents left empty) and writes the file if
    anything was removed.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        cfg = _open_config(args)
        cfg.delete(args.path)
        written = cfg.store()
    except AppBasisError as err:
        return _report_error(err, args)

    where = join_path(resolve_path(args.path))
    if written:
        print(f"[SUCCESS] {where} removed from {cfg.filename}")
    else:
        print(f"{where} is not set, nothing written")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'appbasis show' command.

    Dumps the whole config, or the subtree at PATH, as YAML.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        cfg = _open_config(args)
    except AppBasisError as err:
        return _report_error(err, args)

    value = cfg.get(args.path)
    if value is None:
        print(f"Error: {join_path(resolve_path(args.path))} is not set")
        return 1
    print(_format_value(value))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file",
        help="Path to the YAML config file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of replacing a value that is in the way of a path",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show what is loaded and stored",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show every tree change (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the appbasis command."""
    parser = argparse.ArgumentParser(
        prog="appbasis",
        description="Read and edit YAML config files by path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"appbasis {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        help="Print the value at a path",
        description="Print the value stored at PATH. Mappings are printed as YAML.",
    )
    _add_common_arguments(parser_get)
    parser_get.add_argument("path", help="Path such as server/port or server.port")
    parser_get.set_defaults(func=cmd_get)

    # 'set' command
    parser_set = subparsers.add_parser(
        "set",
        help="Store a value at a path",
        description="Store VALUE (parsed as YAML) at PATH and save the file if it changed.",
    )
    _add_common_arguments(parser_set)
    parser_set.add_argument("path", help="Path such as server/port or server.port")
    parser_set.add_argument("value", help="Value to store, parsed as YAML")
    parser_set.set_defaults(func=cmd_set)

    # 'delete' command
    parser_delete = subparsers.add_parser(
        "delete",
        help="Remove a path",
        description="Remove PATH and any parent mappings left empty, then save the file.",
    )
    _add_common_arguments(parser_delete)
    parser_delete.add_argument("path", help="Path such as server/port or server.port")
    parser_delete.set_defaults(func=cmd_delete)

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Dump the config as YAML",
        description="Print the whole config, or the subtree at PATH, as YAML.",
    )
    _add_common_arguments(parser_show)
    parser_show.add_argument(
        "path", nargs="?", default="/", help="Subtree to show (default: whole file)"
    )
    parser_show.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the appbasis CLI.

    This function is registered as the 'appbasis' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
