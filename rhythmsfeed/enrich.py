"""
On-demand enrichment (second pass).

Events whose listing row has no concrete dates are looked up on their own
detail page. Pages are visited one at a time, in listing order, with a
fixed pause between two visits so the source site is never hammered.

A failing detail page only affects its own event: the error is logged and
the event stays on-demand.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

from rhythmsfeed import settings
from rhythmsfeed.dates import find_date_range, normalize_single
from rhythmsfeed.logging_utils import get_logger
from rhythmsfeed.model import Event
from rhythmsfeed.render import PageSession

logger = get_logger(__name__)


def needs_dates(event: Event) -> bool:
    return event.is_on_demand and bool(event.url)


def fetch_event_dates(
    session: PageSession,
    url: str,
    timeout_ms: int = settings.DETAIL_TIMEOUT_MS,
) -> Optional[Tuple[str, str]]:
    """
    Visit a detail page and return the first ("D Mon YYYY", "D Mon YYYY")
    pair found in its visible text, or None.
    """
    session.goto(url, timeout_ms=timeout_ms)
    return find_date_range(session.inner_text())


def enrich_on_demand(
    events: List[Event],
    session: PageSession,
    delay_seconds: float = settings.FETCH_DELAY_SECONDS,
    timeout_ms: int = settings.DETAIL_TIMEOUT_MS,
    sleep: Callable[[float], None] = time.sleep,
) -> List[Event]:
    """
    Return a new event list where on-demand events with a detail page got
    their dates resolved when possible. Order is preserved.
    """
    todo = [i for i, e in enumerate(events) if needs_dates(e)]
    if not todo:
        return list(events)

    logger.info("Fetching dates for %d on-demand events...", len(todo))

    out = list(events)
    for n, index in enumerate(todo, start=1):
        event = events[index]
        logger.info("  [%d/%d] %s", n, len(todo), event.name)

        try:
            found = fetch_event_dates(session, str(event.url), timeout_ms=timeout_ms)
        except Exception as e:  # any failure only affects this event
            logger.warning("Error fetching dates from %s: %s", event.url, e)
            found = None

        if found:
            date_from = normalize_single(found[0])
            date_to = normalize_single(found[1])
            if date_from and date_to:
                out[index] = event.with_dates(date_from, date_to)
                logger.info("    -> %s - %s", found[0], found[1])

        # pause between visits, not after the last one
        if n < len(todo):
            sleep(delay_seconds)

    return out
