"""
Listing extraction (rendered search results HTML -> events).

The search results page contains one container with one row per event:

    #searchresults_classes
        #searchresults_rows            (the id is repeated for every row)
            #name #dates #teacher #map #city #country #contactInfo

Rows are returned in document order. Missing cells never fail a row; only
a missing results container fails the whole extraction.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from rhythmsfeed.cells import as_level, as_people, parse_cell, parse_contact
from rhythmsfeed.dates import normalize_range
from rhythmsfeed.errors import ListingStructureError
from rhythmsfeed.logging_utils import get_logger
from rhythmsfeed.model import Event, Link, LinkList, Text

logger = get_logger(__name__)


CONTAINER_SELECTOR = "#searchresults_classes"
ROW_SELECTOR = "#searchresults_rows"

# Events whose map cell is meaningless; they are labelled with their own name
SELF_LEVELLED_EVENTS = ("God, Sex and the Body",)


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def _cell(row: Tag, cell_id: str) -> Optional[Tag]:
    return row.select_one(f"#{cell_id}")


def _plain(row: Tag, cell_id: str) -> Optional[str]:
    cell = _cell(row, cell_id)
    return cell.get_text().strip() if cell is not None else None


def _name_and_url(row: Tag, base_url: str) -> Tuple[str, Optional[str]]:
    value = parse_cell(_cell(row, "name"), base_url)
    if value is None:
        return "", None
    if isinstance(value, Text):
        return value.value, None
    if isinstance(value, Link):
        return value.title, value.url
    if isinstance(value, LinkList):
        first = value.links[0]
        return first.title, first.url
    raise TypeError(f"Unexpected cell value: {value!r}")


def parse_row(row: Tag, base_url: str) -> Event:
    """
    Parse one result row into an Event with provisional dates.
    """
    name, url = _name_and_url(row, base_url)

    level = as_level(parse_cell(_cell(row, "map"), base_url))
    if name in SELF_LEVELLED_EVENTS:
        level = Text(name)

    return Event(
        name=name,
        url=url,
        date_state=normalize_range(_plain(row, "dates")),
        teachers=as_people(parse_cell(_cell(row, "teacher"), base_url)),
        level=level,
        city=_plain(row, "city"),
        country=_plain(row, "country"),
        contact=parse_contact(_cell(row, "contactInfo")),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_events(html: str, base_url: str) -> List[Event]:
    """
    Extract all events from the rendered listing page.

    Raises ListingStructureError if the results container is missing.
    """
    soup = BeautifulSoup(html, "html.parser")

    container = soup.select_one(CONTAINER_SELECTOR)
    if container is None:
        raise ListingStructureError(f"Could not find {CONTAINER_SELECTOR} container")

    events = [parse_row(row, base_url) for row in container.select(ROW_SELECTOR)]

    on_demand = sum(1 for e in events if e.is_on_demand)
    logger.info("Extracted %d events (%d without concrete dates)", len(events), on_demand)

    return events
