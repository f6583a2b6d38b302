"""
CLI (Command Line Interface).

Running the command without arguments fetches the listing, resolves the
on-demand dates, drops past events and prints the report:

    rhythmsfeed > events.json

Exit codes:
    0  report written
    1  fatal error (nothing written to stdout)

Progress messages go to stderr.
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, ContextManager

from rhythmsfeed import settings
from rhythmsfeed.logging_utils import get_logger
from rhythmsfeed.pipeline import Fatal, Success, run_pipeline
from rhythmsfeed.render import RENDERERS, PageSession, open_session
from rhythmsfeed.report import save_report, write_report

logger = get_logger("rhythmsfeed")

SessionFactory = Callable[[str], ContextManager[PageSession]]


def non_negative_float(text: str) -> float:
    """argparse type for durations: a float >= 0."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if not value >= 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser. Every option has a default, so the
    command works without any arguments.
    """
    p = argparse.ArgumentParser(prog="rhythmsfeed", description="Fetch upcoming 5Rhythms events as JSON")
    p.add_argument("--out", "-o", type=str, default="", help="Write the report to this file instead of stdout")
    p.add_argument(
        "--delay",
        type=non_negative_float,
        default=settings.FETCH_DELAY_SECONDS,
        help="Seconds to wait between two detail page visits",
    )
    p.add_argument("--renderer", choices=RENDERERS, default=settings.RENDERER, help="Page rendering backend")
    p.add_argument("--url", type=str, default=settings.SOURCE_URL, help="Listing URL to query")
    return p


def run(args: argparse.Namespace, session_factory: SessionFactory = open_session) -> int:
    """
    Run the pipeline and write the report. Returns the process exit code.
    """
    try:
        with session_factory(args.renderer) as session:
            outcome = run_pipeline(session, source_url=args.url, delay_seconds=args.delay)
    except Exception as e:  # browser launch etc.
        logger.error("Error fetching events: %s", e)
        return 1

    if isinstance(outcome, Fatal):
        logger.error("%s", outcome.message)
        return 1

    if isinstance(outcome, Success):
        if args.out:
            path = save_report(outcome.report, args.out)
            logger.info("Wrote %d events to %s", outcome.report.metadata.event_count, path)
        else:
            write_report(outcome.report, sys.stdout)
        return 0

    raise TypeError(f"Unexpected pipeline outcome: {outcome!r}")


def main(argv: list[str] | None = None, session_factory: SessionFactory = open_session) -> None:
    """
    CLI entry point. Exits via SystemExit with the return code.
    """
    args = build_parser().parse_args(argv)
    raise SystemExit(run(args, session_factory=session_factory))
