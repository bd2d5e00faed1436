"""Assemble full sessions from a mail log file and print them as JSON.

Usage:
  python -m mailsessions --log /var/log/mail/sessions.log
  python -m mailsessions --log sessions.log --duration-order legacy -o sessions.json
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mailsessions import config
from mailsessions.errors import SessionLogError
from mailsessions.observability import initialize as initialize_observability, shutdown as shutdown_observability
from mailsessions.output import render_sessions
from mailsessions.pipeline import assemble_file, collect_full_sessions

logger = logging.getLogger("mailsessions.cli")

_VERBOSITY = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mailsessions",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log",
        default=config.LOG_PATH,
        help="file path to log file (default: $MAILSESSIONS_LOG_PATH)",
    )
    parser.add_argument(
        "--duration-order",
        choices=config.DURATION_ORDERS,
        default=config.DURATION_ORDER,
        help="elapsed: end minus start; legacy: historical start minus end on a 24h clock",
    )
    parser.add_argument(
        "--on-timestamp-error",
        choices=config.TIMESTAMP_ERROR_POLICIES,
        default=config.ON_TIMESTAMP_ERROR,
        help="abort the run, or leave only the affected session incomplete",
    )
    parser.add_argument("-o", "--output", default="", help="write JSON here instead of stdout")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging detail, repeat for more.",
    )
    return parser


def _configure_logging(verbose: int) -> None:
    if verbose:
        level = _VERBOSITY[min(len(_VERBOSITY) - 1, verbose)]
    else:
        level = logging.getLevelName(config.LOG_LEVEL)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s]: %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.log:
        parser.error("--log is required (or set MAILSESSIONS_LOG_PATH)")

    _configure_logging(args.verbose)
    initialize_observability()
    try:
        assembler = assemble_file(
            args.log,
            duration_order=args.duration_order,
            on_timestamp_error=args.on_timestamp_error,
        )
        sessions = collect_full_sessions(assembler, source=Path(args.log).name)
        rendered = render_sessions(sessions)
        if args.output:
            try:
                Path(args.output).write_text(rendered, encoding="utf-8")
            except OSError as exc:
                logger.error("can't write output - %s", exc)
                return 1
        else:
            sys.stdout.write(rendered)
        return 0
    except SessionLogError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        shutdown_observability()


if __name__ == "__main__":
    raise SystemExit(main())
