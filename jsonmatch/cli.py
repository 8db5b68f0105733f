"""Command line interface for jsonmatch."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .engine import JsonMatchEngine
from .exceptions import JsonMatchError
from .models import DiffOptions, Difference, load_config_file
from .suite import run_suite
from .utils import read_document

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonmatch",
        description="Compare JSON documents structurally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsonmatch compare actual.json expected.json
  jsonmatch compare actual.json expected.json --ignore updatedAt --fuzzy id
  jsonmatch compare actual.json expected.json -c options.yaml --preset console
  jsonmatch run options.yaml cases/ -r report.json
        """
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare_parser = subparsers.add_parser("compare", help="Compare two documents")
    compare_parser.add_argument("first", help="Document expected to be the superset ('-' for stdin)")
    compare_parser.add_argument("second", help="Document it must contain")
    compare_parser.add_argument("-c", "--config", help="Path to YAML/JSON options file")
    compare_parser.add_argument("--preset", choices=["console", "html"], help="Markup preset")
    compare_parser.add_argument("--fuzzy", action="append", default=[], metavar="FIELD",
                                help="Field whose value is never compared (repeatable)")
    compare_parser.add_argument("--ignore", action="append", default=[], metavar="FIELD",
                                help="Field skipped entirely (repeatable)")
    compare_parser.add_argument("--string-as-map", action="append", default=[], metavar="FIELD",
                                help="Field holding embedded JSON text (repeatable)")
    compare_parser.add_argument("--null-as-empty", action="store_true",
                                help="Treat null as equal to [] and {}")
    compare_parser.add_argument("--print-types", action="store_true",
                                help="Print the kind of every rendered value")

    run_parser = subparsers.add_parser("run", help="Run a folder of case files")
    run_parser.add_argument("options", help="Path to YAML/JSON options file")
    run_parser.add_argument("datasets", help="Path to folder containing case JSON files")
    run_parser.add_argument("-r", "--report", help="Path to output JSON report file")
    run_parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    return parser


def build_options(args: argparse.Namespace) -> DiffOptions:
    """Merge the options file, preset and command line flags."""
    data = load_config_file(args.config) if args.config else {}
    if args.preset:
        # Seeds the options; keys from the file still override it
        data["preset"] = args.preset
    options = DiffOptions.from_dict(data)

    options.fuzzy_fields = options.fuzzy_fields | frozenset(args.fuzzy)
    options.ignore_fields = options.ignore_fields | frozenset(args.ignore)
    options.string_as_map_fields = options.string_as_map_fields | frozenset(args.string_as_map)
    options.null_as_empty = options.null_as_empty or args.null_as_empty
    options.print_types = options.print_types or args.print_types
    return options


def exit_code(difference: Difference) -> int:
    if difference.is_invalid:
        return EXIT_INVALID
    if difference.is_match:
        return EXIT_MATCH
    return EXIT_NO_MATCH


def run_compare(args: argparse.Namespace) -> int:
    options = build_options(args)
    engine = JsonMatchEngine(options)
    difference, message = engine.compare(read_document(args.first), read_document(args.second))

    print(difference.name)
    if message:
        print(message)
    return exit_code(difference)


def run_cases(args: argparse.Namespace) -> int:
    if not Path(args.options).exists():
        print(f"Error: Options file not found: {args.options}", file=sys.stderr)
        return EXIT_INVALID
    if not Path(args.datasets).exists():
        print(f"Error: Datasets folder not found: {args.datasets}", file=sys.stderr)
        return EXIT_INVALID

    report = run_suite(args.options, args.datasets, print_report=not args.quiet)

    if args.report:
        with open(args.report, 'w') as f:
            json.dump(report.to_dict(), indent=2, fp=f)
        if not args.quiet:
            print(f"\nReport saved to: {args.report}")

    return EXIT_MATCH if report.failed == 0 else EXIT_NO_MATCH


def main(argv: list[str] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.command == "compare":
            return run_compare(args)
        return run_cases(args)
    except (JsonMatchError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
