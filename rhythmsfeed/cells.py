"""
Cell parsing (rendered table cell -> typed value).

The listing table is not uniform: the same column can hold a plain label,
one linked entity, or several comma separated linked entities (for example
two teachers co-hosting an event). Cells may also contain an in-page anchor
("#...") that only opens the contact form; such anchors are not data.

parse_cell() turns a cell into exactly one of:

    Text(value)      no real link
    Link(title, url) exactly one real link
    LinkList(links)  more than one real link
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import urljoin

from bs4.element import Tag

from rhythmsfeed.model import CellValue, Contact, Link, LinkList, Person, Text


CONTACT_FORM_SELECTOR = 'a[href^="#search_result_contact_form"]'


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(node: Tag) -> str:
    return node.get_text().strip()


def _is_fragment(link: Tag) -> bool:
    href = link.get("href")
    return isinstance(href, str) and href.startswith("#")


def _without(full_text: str, label: str) -> str:
    # remove the first occurrence only, like the label appears once in the cell
    return full_text.replace(label, "", 1).strip()


def _to_link(link: Tag, base_url: str) -> Link:
    href = link.get("href") or ""
    return Link(title=_text(link), url=urljoin(base_url.rstrip("/") + "/", str(href)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_cell(cell: Optional[Tag], base_url: str) -> Optional[CellValue]:
    """
    Parse one listing cell. Returns None if the cell is missing.
    """
    if cell is None:
        return None

    full_text = _text(cell)
    links = cell.find_all("a")

    if not links:
        return Text(full_text)

    if len(links) == 1:
        link = links[0]
        if _is_fragment(link):
            # e.g. a "contact" trigger: keep the surrounding text only
            other = _without(full_text, _text(link))
            return Text(other or full_text)
        return _to_link(link, base_url)

    real: List[Link] = [_to_link(a, base_url) for a in links if not _is_fragment(a)]

    if not real:
        return Text(full_text)
    if len(real) == 1:
        return real[0]
    return LinkList(tuple(real))


def as_people(value: Optional[CellValue]) -> Tuple[Person, ...]:
    """
    Teachers column -> ordered people (a single value becomes a 1-tuple).
    """
    if value is None:
        return ()
    if isinstance(value, Text):
        return (Person(title=value.value),) if value.value else ()
    if isinstance(value, Link):
        return (Person(title=value.title, url=value.url),)
    if isinstance(value, LinkList):
        return tuple(Person(title=link.title, url=link.url) for link in value.links)
    raise TypeError(f"Unexpected cell value: {value!r}")


def as_level(value: Optional[CellValue]) -> Optional[CellValue]:
    """
    Map column -> level. Empty labels count as no level.
    """
    if value is None:
        return None
    if isinstance(value, Text):
        return value if value.value else None
    if isinstance(value, (Link, LinkList)):
        return value
    raise TypeError(f"Unexpected cell value: {value!r}")


def parse_contact(cell: Optional[Tag]) -> Optional[Contact]:
    """
    Contact column: an optional contact-form anchor plus an optional phone.

    The anchor carries the teacher reference in its ``data-teacher``
    attribute. Everything else in the cell is the phone number.
    """
    if cell is None:
        return None

    form_link = cell.select_one(CONTACT_FORM_SELECTOR)

    has_form = form_link is not None
    teacher_id: Optional[str] = None
    label = ""
    if form_link is not None:
        raw_id = form_link.get("data-teacher")
        teacher_id = str(raw_id) if raw_id is not None else None
        label = _text(form_link)

    phone = _without(_text(cell), label) if label else _text(cell)

    if not has_form and not phone:
        return None

    return Contact(phone=phone or None, has_contact_form=has_form, teacher_id=teacher_id)
