"""Command-line driver for semtag."""

from __future__ import annotations

import argparse
import logging
import sys

from semtag.cli.helpers import (
    EXIT_FAILURE,
    build_logger_manager,
    load_config,
    merge_options,
    run_compare,
    run_latest,
)
from semtag.config.env import load_environment, settings_from_env
from semtag.enums import Method
from semtag.utilities.version import get_runtime_version

METHOD_HELP = "Backend to use: " + ", ".join(method.value for method in Method)


class _RuntimeVersionAction(argparse.Action):
    """Print the runtime version, resolving it only when the flag is used."""

    def __init__(
        self,
        option_strings: list[str],
        dest: str = argparse.SUPPRESS,
        default: str = argparse.SUPPRESS,
        help: str | None = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help,
        )

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        print(get_runtime_version())
        parser.exit()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "repository",
        nargs="?",
        default=None,
        help="Path to the repository working copy (default: current directory).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional YAML configuration file.",
    )
    parser.add_argument(
        "--git",
        dest="git_executable",
        default=None,
        help="git executable used by the git-binary backend.",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print a JSON report instead of plain text.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics written to stderr.",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Directory for a rotating log file.",
    )
    parser.add_argument(
        "--structured-logs",
        dest="structured_logging",
        action="store_true",
        default=None,
        help="Emit JSON log lines.",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="semtag",
        description="Print the latest semantic-version tag reachable from HEAD.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action=_RuntimeVersionAction,
        help="Show the runtime version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    latest_parser = subparsers.add_parser(
        "latest",
        help="Resolve the latest reachable semantic-version tag.",
    )
    _add_common_arguments(latest_parser)
    latest_parser.add_argument(
        "--method",
        "-m",
        default=None,
        help=METHOD_HELP,
    )
    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every backend and check that they agree.",
    )
    _add_common_arguments(compare_parser)
    return parser.parse_args(argv)


def _bootstrap_logger() -> logging.Logger:
    bootstrap_logger = logging.getLogger("semtag.bootstrap")
    bootstrap_logger.setLevel(logging.INFO)
    if not bootstrap_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        bootstrap_logger.addHandler(handler)
    bootstrap_logger.propagate = False
    return bootstrap_logger


def cli(argv: list[str] | None = None) -> int:
    """Entry point returning the process exit code."""
    load_environment()
    args = parse_args(argv)

    config = load_config(args.config, _bootstrap_logger())
    options = merge_options(vars(args), config, settings_from_env())
    logger_manager = build_logger_manager(options)
    logger = logger_manager.get_logger()
    logger.debug(
        "semtag %s starting",
        args.command,
        extra={"context": {"repository": options.repository}},
    )
    try:
        runner = run_compare if args.command == "compare" else run_latest
        exit_code, output = runner(options, as_json=args.as_json, logger=logger)
    except Exception:
        logger.error("Unexpected error occurred", exc_info=True)
        return EXIT_FAILURE
    finally:
        logger_manager.flush()
    if output:
        print(output)
    return exit_code


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("Interrupted by user", file=sys.stderr)
        sys.exit(1)
