"""
Past-event filtering.

Rule:
    an event is past if BOTH date_from and date_to are before the cutoff

so an event that is still running is kept, and an event without dates is
always kept (missing information must never drop an event silently).
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from rhythmsfeed.dates import yesterday_key
from rhythmsfeed.logging_utils import get_logger
from rhythmsfeed.model import Dated, Event

logger = get_logger(__name__)


def is_past(event: Event, cutoff: str) -> bool:
    state = event.date_state
    if not isinstance(state, Dated):
        return False
    return state.date_from < cutoff and state.date_to < cutoff


def find_reversed_ranges(events: List[Event]) -> List[Event]:
    """Events whose end date is before their start date (kept as authored)."""
    return [
        e
        for e in events
        if isinstance(e.date_state, Dated) and e.date_state.date_from > e.date_state.date_to
    ]


def filter_past(events: List[Event], cutoff: Optional[str] = None) -> Tuple[List[Event], int]:
    """
    Drop past events. Returns (kept_events, removed_count); order is kept.
    """
    cutoff_key = cutoff if cutoff is not None else yesterday_key()

    for e in find_reversed_ranges(events):
        logger.debug("Reversed date range kept as-is: %s (%s)", e.name, e.date_state)

    kept = [e for e in events if not is_past(e, cutoff_key)]
    return kept, len(events) - len(kept)
