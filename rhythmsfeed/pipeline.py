"""
Feed pipeline.

Orchestrates the full run:
1. Listing (render the search results and extract events)
2. Enrichment (resolve dates of on-demand events from their detail pages)
3. Filtering (drop events that are fully in the past)
4. Report (metadata + remaining events)

run_pipeline() never exits the process. It returns Success(report) or
Fatal(message); the CLI turns that into an exit code.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from rhythmsfeed import settings
from rhythmsfeed.dates import yesterday_key
from rhythmsfeed.enrich import enrich_on_demand
from rhythmsfeed.errors import FeedError
from rhythmsfeed.filters import filter_past
from rhythmsfeed.listing import CONTAINER_SELECTOR, extract_events
from rhythmsfeed.logging_utils import get_logger
from rhythmsfeed.model import Event, Report
from rhythmsfeed.render import PageSession

logger = get_logger(__name__)


@dataclass(frozen=True)
class Success:
    report: Report


@dataclass(frozen=True)
class Fatal:
    message: str


Outcome = Union[Success, Fatal]


def fetch_listing(
    session: PageSession,
    source_url: str = settings.SOURCE_URL,
    base_url: str = settings.BASE_URL,
) -> List[Event]:
    """
    Render the listing page and extract its events.

    Raises RenderError / ListingStructureError; both are fatal for the run.
    """
    logger.info("Fetching events from %s", source_url)
    session.goto(source_url, timeout_ms=settings.LISTING_TIMEOUT_MS)
    session.wait_for_selector(CONTAINER_SELECTOR, timeout_ms=settings.CONTAINER_TIMEOUT_MS)
    return extract_events(session.content(), base_url)


def run_pipeline(
    session: PageSession,
    source_url: str = settings.SOURCE_URL,
    base_url: str = settings.BASE_URL,
    delay_seconds: float = settings.FETCH_DELAY_SECONDS,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Outcome:
    # Stage 1: listing
    try:
        events = fetch_listing(session, source_url=source_url, base_url=base_url)
    except FeedError as e:
        return Fatal(f"Error fetching events: {e}")

    if not events:
        return Fatal("No events found from source")

    # Stage 2: on-demand enrichment
    events = enrich_on_demand(events, session, delay_seconds=delay_seconds, sleep=sleep)

    # Stage 3: past-event filtering
    current, removed = filter_past(events, yesterday_key(today))
    logger.info("Filtered out %d past events", removed)

    if not current:
        return Fatal("No current events remaining after filtering past events")

    # Stage 4: report
    return Success(Report.build(source_url, current, now=now))
