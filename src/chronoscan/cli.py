"""Command-line entry point: ``chronoscan [options] TEXT...``

Prints the date/time found in TEXT, or the full result as JSON. Exits with
status 1 when nothing is found and 2 on configuration errors.
"""

import argparse
import json
import sys
from datetime import date
from typing import List, Optional

from .core.config_manager import ConfigManager
from .core.error_handler import ConfigurationError, ErrorHandler
from .core.logging_manager import LoggingManager
from .processors.core.models import DefaultDateConfig, FormatPreference, ParsedResult


EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_CONFIG_ERROR = 2

MODES = ("date-or-time", "date-and-time", "date", "time")


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chronoscan",
        description="Find a date and/or time in free text"
    )
    parser.add_argument("text", nargs="+", help="Text to search")
    parser.add_argument("--mode", choices=MODES, default="date-or-time",
                        help="What must be found (default: date-or-time)")
    parser.add_argument("--month-first", action="store_true",
                        help="Read 01/02/2012 as 2 January and recognize CST/EST")
    parser.add_argument("--default-date", type=_iso_date,
                        help="Date used when only a time is found (YYYY-MM-DD)")
    parser.add_argument("--config", help="Configuration directory")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def format_result(result: ParsedResult, mode: str) -> str:
    """Render a result as a single line for the given mode."""
    local = result.local_datetime
    if mode == "date":
        return local.date().isoformat()
    if mode == "time":
        return local.strftime("%H:%M:%S")
    return f"{local.date().isoformat()} {local.strftime('%H:%M:%S')}"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line tool."""
    args = build_parser().parse_args(argv)

    error_handler = ErrorHandler(LoggingManager.get_logger(__name__))

    try:
        manager = ConfigManager(config_path=args.config)
        manager.configure_logging()
        extractor = manager.apply()
    except ConfigurationError as e:
        error_handler.handle_error(e, context="Loading configuration")
        print(f"chronoscan: {e.message}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.verbose:
        LoggingManager().set_log_level("DEBUG")

    fmt = FormatPreference.MONTH_FIRST if args.month_first else extractor.format_preference
    defaults = DefaultDateConfig.fixed(args.default_date) if args.default_date else None
    text = " ".join(args.text)

    if args.mode == "date-and-time":
        result = extractor.parse_date_and_time_full(text, fmt, defaults)
    elif args.mode == "date":
        result = extractor.parse_date_only_full(text, fmt, defaults)
    elif args.mode == "time":
        result = extractor.parse_time_only_full(text, fmt)
    else:
        result = extractor.parse_date_or_time_full(text, fmt, defaults)

    if result is None:
        print("chronoscan: no match", file=sys.stderr)
        return EXIT_NO_MATCH

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result, args.mode))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
