import argparse
import logging
import sys
from pathlib import Path

from libcountdown.log_utils import get_default_log, init_log
from libcountdown.scripts import check, run
from libcountdown.utils import VERSION


def main():
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "-l",
        "--log-level",
        default=None,
        dest="log_level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Set countdown log level (default: log_level from the config, else WARNING)",
    )
    parent_parser.add_argument(
        "-p",
        "--log-path",
        default=get_default_log(),
        dest="log_path",
        type=Path,
        help="Set alternative countdown log path",
    )
    main_parser = argparse.ArgumentParser(
        prog="countdown",
        description="Show the time left until a temporary code expires.",
    )
    main_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION,
    )

    subparsers = main_parser.add_subparsers()
    run.add_subcommand(subparsers, [parent_parser])
    check.add_subcommand(subparsers, [parent_parser])

    options = main_parser.parse_args()
    if func := getattr(options, "func", None):
        log_level = getattr(logging, options.log_level or "WARNING")
        init_log(log_level, log_path=options.log_path)
        sys.exit(func(options))
    else:
        main_parser.print_usage()
        sys.exit(1)


if __name__ == "__main__":
    main()
