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

"""Command-line interface for plistconf.

A small diagnostic tool for looking at what a snapshot makes of a plist
file. It reads the file once; it does not watch or reload it.

Commands:

    show: Print the snapshot description and its sorted, redacted contents
    get: Print one typed value

Example:
    Show a snapshot with a secret key:
        ```bash
        $ plistconf show Config.plist --secret database.password
        Config.plist[3 values]
        Config.plist[3 values: database.password=<REDACTED>, http.timeout=30, ...]
        ```

    Read a typed value:
        ```bash
        $ plistconf get Config.plist http.timeout --type double
        30.0
        ```

    Use an options file:
        ```bash
        $ plistconf show Config.plist --options plistconf.yaml --verbose
        ```

Exit Codes:

- 0: Success
- 1: Error (unreadable file, invalid plist, missing key, type mismatch)

"""

from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path
import sys

from plistconf import __version__
from plistconf.exceptions import OptionsError, PlistConfError, SnapshotError, TypeMismatchError
from plistconf.logging import get_logger, set_global_logger
from plistconf.options import ParsingOptions, load_parsing_options
from plistconf.secrets_policy import AllSecrets, SpecificSecrets
from plistconf.snapshot import PlistSnapshot
from plistconf.values import ConfigType


def _build_options(args: argparse.Namespace) -> ParsingOptions:
    """Combine --options with command-line secret flags (flags win)."""
    if args.options:
        options = load_parsing_options(Path(args.options))
    else:
        options = ParsingOptions.default()

    if args.all_secret:
        options = dataclasses.replace(options, secrets=AllSecrets())
    elif args.secret:
        options = dataclasses.replace(options, secrets=SpecificSecrets(args.secret))
    return options


def _load_snapshot(args: argparse.Namespace) -> PlistSnapshot | None:
    """Load the snapshot for a command, printing errors.

    Returns:
        The snapshot, or None if loading failed (error already printed).

    """
    plist_path = Path(args.plist).resolve()
    if not plist_path.exists():
        print(f"Error: plist file not found: {plist_path}")
        return None

    try:
        options = _build_options(args)
        return PlistSnapshot.from_file(plist_path, args.name, options)
    except (OptionsError, SnapshotError) as err:
        kind = "Options" if isinstance(err, OptionsError) else "Snapshot"
        print(f"{kind} error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return None


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'plistconf show'.

    Prints the summary line, then (unless --summary) the debug description
    with secret values redacted.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    snapshot = _load_snapshot(args)
    if snapshot is None:
        return 1

    print(snapshot.description)
    if not args.summary:
        print(snapshot.debug_description)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handler for 'plistconf get'.

    Looks up a dotted key with the requested type and prints the value.
    Secret values print as <REDACTED> unless --reveal is given.

    Returns:
        Exit code (0 when a value was printed, 1 otherwise).

    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    snapshot = _load_snapshot(args)
    if snapshot is None:
        return 1

    try:
        result = snapshot.value_for_key(args.key, args.type)
    except TypeMismatchError as err:
        print(f"Error: {err}")
        return 1

    if result.value is None:
        print(f"Error: no value for key {result.encoded_key!r}")
        return 1

    if args.reveal:
        print(result.value.content.render())
    else:
        print(result.value)
    return 0


def _config_type(name: str) -> ConfigType:
    try:
        return ConfigType.parse(name)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "plist",
        help="Path to the property list file (XML or binary)",
    )
    parser.add_argument(
        "--options",
        default=None,
        help="YAML parsing-options file (secrets, bytes_decoder, format)",
    )
    parser.add_argument(
        "--secret",
        action="append",
        default=[],
        metavar="KEY",
        help="Mark a dotted key as secret (repeatable; overrides --options)",
    )
    parser.add_argument(
        "--all-secret",
        action="store_true",
        help="Mark every value as secret",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Provider name shown in output (default: file name)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show loading progress",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show per-key parse details (implies --verbose)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plistconf",
        description="plistconf - inspect property-list configuration snapshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"plistconf {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Print the snapshot description and contents",
        description="Flatten a plist and print its sorted contents with secrets redacted.",
    )
    _add_common_arguments(parser_show)
    parser_show.add_argument(
        "--summary",
        action="store_true",
        help="Only print the '<name>[N values]' summary",
    )
    parser_show.set_defaults(func=cmd_show)

    # 'get' command
    parser_get = subparsers.add_parser(
        "get",
        help="Print one typed value",
        description="Look up a dotted key and print it coerced to the requested type.",
    )
    _add_common_arguments(parser_get)
    parser_get.add_argument(
        "key",
        help="Dotted key (e.g. http.timeout)",
    )
    parser_get.add_argument(
        "--type",
        type=_config_type,
        default=ConfigType.STRING,
        help="Requested type: string, int, double, bool, bytes, stringArray, "
        "intArray, doubleArray, boolArray (default: string)",
    )
    parser_get.add_argument(
        "--reveal",
        action="store_true",
        help="Print secret values instead of <REDACTED>",
    )
    parser_get.set_defaults(func=cmd_get)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the plistconf CLI.

    This function is registered as the 'plistconf' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        exit_code = args.func(args)
    except PlistConfError as err:
        print(f"Error: {err}")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
