"""Command-line interface for json-mend."""

from __future__ import annotations

import argparse
import logging
import sys

import orjson

from . import __version__
from .parser import DEFAULT_MAX_PASSES, process
from .types import RepairResult


def main(args: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = argparse.ArgumentParser(
        prog="json-mend",
        description="Repair JSON-like text into strict JSON, or show where it is broken.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  json-mend "{name: 'nate', active: True,}"
  json-mend -f config.jsonc --pretty
  cat settings.js | json-mend --cleaned
  json-mend -f broken.json --verbose
        """,
    )

    # Input options
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument(
        "text",
        nargs="?",
        help="JSON-like text to repair",
    )
    input_group.add_argument(
        "-f",
        "--file",
        type=str,
        help="File containing JSON-like text to repair",
    )

    # Repair options
    parser.add_argument(
        "--max-passes",
        type=int,
        default=DEFAULT_MAX_PASSES,
        help=f"Maximum number of repair passes (default: {DEFAULT_MAX_PASSES})",
    )

    # Output options
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print the JSON output",
    )
    output_group.add_argument(
        "--compact",
        action="store_true",
        help="Output compact JSON (default)",
    )
    output_group.add_argument(
        "--cleaned",
        action="store_true",
        help="Output the repaired text as is instead of re-serializing it",
    )

    # Metadata options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show repair metadata",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log repair tracing to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parsed_args = parser.parse_args(args)

    if parsed_args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    # Get input text
    text = _get_input_text(parsed_args)
    if text is None:
        print(
            "Error: No input provided. Use text argument, -f file, or pipe input.",
            file=sys.stderr,
        )
        return 1

    result = process(text, max_passes=parsed_args.max_passes)

    # Handle result
    if result.ok is None:
        print("Error: Empty input text", file=sys.stderr)
        return 1

    if not result.ok:
        _print_diagnostic(result)
        if parsed_args.verbose:
            _print_metadata(result)
        return 1

    # Output JSON
    if parsed_args.cleaned:
        print(result.cleaned_text)
    else:
        print(_format_output(result.value, pretty=parsed_args.pretty))

    # Show metadata if verbose
    if parsed_args.verbose:
        _print_metadata(result)

    return 0


def _get_input_text(args: argparse.Namespace) -> str | None:
    """Get input text from arguments, file, or stdin."""
    if args.text:
        return args.text

    if args.file:
        try:
            with open(args.file, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return None
        except PermissionError:
            print(f"Error: Permission denied: {args.file}", file=sys.stderr)
            return None

    # Try stdin
    if not sys.stdin.isatty():
        return sys.stdin.read()

    return None


def _format_output(data: object, pretty: bool = False) -> str:
    """Format data as JSON string."""
    if pretty:
        return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")
    return orjson.dumps(data).decode("utf-8")


def _print_diagnostic(result: RepairResult) -> None:
    """Print a failed result's diagnostic to stderr."""
    diagnostic = result.diagnostic
    if diagnostic is None:
        return

    print(f"Error: {diagnostic.message}", file=sys.stderr)
    if diagnostic.position is not None:
        location = f"line {diagnostic.position.line}, column {diagnostic.position.col}"
        if diagnostic.token:
            location += f" near {diagnostic.token!r}"
        print(f"Location: {location}", file=sys.stderr)
    if diagnostic.suggestion:
        print(f"Suggestion: {diagnostic.suggestion}", file=sys.stderr)


def _print_metadata(result: RepairResult) -> None:
    """Print repair metadata to stderr."""
    print("\n--- Metadata ---", file=sys.stderr)
    if result.elapsed_ms is not None:
        print(f"Elapsed: {result.elapsed_ms:.1f} ms", file=sys.stderr)
    print(f"Repair passes: {result.passes}", file=sys.stderr)
    if result.repairs_applied:
        print(f"Repairs applied: {', '.join(result.repairs_applied)}", file=sys.stderr)
    if result.diagnostic is not None:
        print(f"Error kind: {result.diagnostic.kind.value}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
