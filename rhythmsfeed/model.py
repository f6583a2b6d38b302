"""
Central data model definitions used across the project.

This module defines the canonical structure of events and of the final
report so that:
- the listing extractor, the enricher and the filter share the same types
- every stage returns new values instead of mutating shared state
- the JSON written for the website build has one single definition

All value types are frozen dataclasses; stages use ``dataclasses.replace``
to produce updated copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Cell values (what a listing table cell can hold)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    """Plain text, or a cell whose only link is an in-page anchor."""

    value: str


@dataclass(frozen=True)
class Link:
    """Exactly one real hyperlink."""

    title: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class LinkList:
    """Several real hyperlinks, e.g. two teachers sharing a workshop."""

    links: Tuple[Link, ...]


CellValue = Union[Text, Link, LinkList]


# ---------------------------------------------------------------------------
# Date state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OnDemand:
    """No concrete dates known (yet)."""


@dataclass(frozen=True)
class Dated:
    """Resolved dates as YYMMDD keys (date_from == date_to for one-day events)."""

    date_from: str
    date_to: str


DateState = Union[OnDemand, Dated]

ON_DEMAND = OnDemand()


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Person:
    title: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        out = {"title": self.title}
        if self.url:
            out["url"] = self.url
        return out


@dataclass(frozen=True)
class Contact:
    phone: Optional[str] = None
    has_contact_form: bool = False
    teacher_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.has_contact_form:
            out["hasContactForm"] = True
            out["teacherId"] = self.teacher_id
        if self.phone:
            out["phone"] = self.phone
        return out


@dataclass(frozen=True)
class Event:
    """
    One row of the listing, possibly refined by its detail page.
    """

    name: str
    url: Optional[str] = None
    date_state: DateState = ON_DEMAND
    teachers: Tuple[Person, ...] = ()
    level: Optional[CellValue] = None
    city: Optional[str] = None
    country: Optional[str] = None
    contact: Optional[Contact] = None

    @property
    def is_on_demand(self) -> bool:
        return isinstance(self.date_state, OnDemand)

    def with_dates(self, date_from: str, date_to: str) -> "Event":
        return replace(self, date_state=Dated(date_from, date_to))

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON shape consumed by the website build.
        """
        out: Dict[str, Any] = {"name": self.name}
        if self.url:
            out["url"] = self.url

        if isinstance(self.date_state, Dated):
            out["is_ondemand"] = False
            out["date_from"] = self.date_state.date_from
            out["date_to"] = self.date_state.date_to
        else:
            out["is_ondemand"] = True
            out["date_from"] = ""
            out["date_to"] = ""

        if self.teachers:
            out["teachers"] = [p.to_dict() for p in self.teachers]

        # singular label -> "level", link(s) -> "levels"
        if isinstance(self.level, Text):
            if self.level.value:
                out["level"] = self.level.value
        elif isinstance(self.level, Link):
            out["levels"] = [self.level.to_dict()]
        elif isinstance(self.level, LinkList):
            out["levels"] = [link.to_dict() for link in self.level.links]

        out["city"] = self.city
        out["country"] = self.country

        if self.contact is not None:
            contact = self.contact.to_dict()
            if contact:
                out["contact"] = contact

        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        date_from = str(data.get("date_from") or "")
        date_to = str(data.get("date_to") or "")
        if data.get("is_ondemand", True) or not (date_from and date_to):
            date_state: DateState = ON_DEMAND
        else:
            date_state = Dated(date_from, date_to)

        teachers = tuple(
            Person(title=str(t.get("title", "")), url=t.get("url"))
            for t in data.get("teachers") or []
            if isinstance(t, dict)
        )

        level: Optional[CellValue] = None
        levels = [
            Link(title=str(x.get("title", "")), url=str(x.get("url", "")))
            for x in data.get("levels") or []
            if isinstance(x, dict)
        ]
        if len(levels) == 1:
            level = levels[0]
        elif levels:
            level = LinkList(tuple(levels))
        elif data.get("level"):
            level = Text(str(data["level"]))

        contact: Optional[Contact] = None
        raw_contact = data.get("contact")
        if isinstance(raw_contact, dict):
            contact = Contact(
                phone=raw_contact.get("phone"),
                has_contact_form=bool(raw_contact.get("hasContactForm", False)),
                teacher_id=raw_contact.get("teacherId"),
            )

        return cls(
            name=str(data.get("name", "")),
            url=data.get("url"),
            date_state=date_state,
            teachers=teachers,
            level=level,
            city=data.get("city"),
            country=data.get("country"),
            contact=contact,
        )


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with milliseconds, e.g. 2025-12-01T08:30:00.000Z."""
    moment = now if now is not None else datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Metadata:
    source_url: str
    event_count: int
    fetched_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceUrl": self.source_url,
            "eventCount": self.event_count,
            "fetchedAt": self.fetched_at,
        }


@dataclass(frozen=True)
class Report:
    metadata: Metadata
    events: Tuple[Event, ...] = field(default_factory=tuple)

    @classmethod
    def build(cls, source_url: str, events: List[Event], now: Optional[datetime] = None) -> "Report":
        return cls(
            metadata=Metadata(
                source_url=source_url,
                event_count=len(events),
                fetched_at=iso_timestamp(now),
            ),
            events=tuple(events),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "events": [e.to_dict() for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        meta = data.get("metadata") or {}
        events = tuple(Event.from_dict(e) for e in data.get("events") or [] if isinstance(e, dict))
        return cls(
            metadata=Metadata(
                source_url=str(meta.get("sourceUrl", "")),
                event_count=int(meta.get("eventCount", len(events))),
                fetched_at=str(meta.get("fetchedAt", "")),
            ),
            events=events,
        )
