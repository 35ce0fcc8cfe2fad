#!/usr/bin/env python3
"""
loglinter CLI

Thin wrapper over the analysis engine.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path

from loglinter.config import DEFAULT_SENSITIVE_PATTERNS, Config
from loglinter.fixes import fix_file
from loglinter.orchestrator import analyze_paths

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INTERNAL = 2
EXIT_DIAGNOSTICS = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loglinter",
        description="Check log/slog and zap logging calls in Go code.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Checks:
  - messages must start with a lowercase letter
  - messages must only contain latin letters, digits and spaces
  - no potentially sensitive variables concatenated into messages

Default sensitive patterns: {", ".join(DEFAULT_SENSITIVE_PATTERNS)}

Examples:
  loglinter check .
  loglinter check ./internal --fix
  loglinter check --new-from-rev origin/main
  loglinter check --sensitive-pattern session --sensitive-pattern cookie
        """,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and full tracebacks",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="{check}",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Lint Go files or directories",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Go files or directories (default: current directory)",
    )
    check_parser.add_argument(
        "--sensitive-pattern",
        dest="sensitive_patterns",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Case-insensitive name fragment marking sensitive data; "
             "repeat to give several. Replaces the default set.",
    )
    check_parser.add_argument(
        "--fix",
        action="store_true",
        help="Apply suggested fixes in place",
    )
    check_parser.add_argument(
        "--new-from-rev",
        metavar="REV",
        default=None,
        help="Only check files changed since this Git revision",
    )

    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _check(args: argparse.Namespace) -> int:
    paths = [Path(p) for p in args.paths]
    for path in paths:
        if not path.exists():
            print(f"Error: Path does not exist: {path}", file=sys.stderr)
            return EXIT_USAGE

    config = Config.from_patterns(args.sensitive_patterns)

    try:
        reports = analyze_paths(paths, config=config, new_from_rev=args.new_from_rev)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    total = 0
    for report in reports:
        for diagnostic in report.diagnostics:
            print(f"{report.location(diagnostic)}: {diagnostic.message}")
            total += 1

    if args.fix:
        for report in reports:
            if report.diagnostics:
                fix_file(report.file.path, report.file.source, report.diagnostics)

    return EXIT_DIAGNOSTICS if total else EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    if args.command == "check":
        try:
            return _check(args)
        except Exception:
            if args.debug:
                traceback.print_exc()
            print("Internal error while checking files.", file=sys.stderr)
            print("Run with --debug for details.", file=sys.stderr)
            return EXIT_INTERNAL

    # This should never happen because argparse enforces commands
    parser.error(f"Unknown command: {args.command}")
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
