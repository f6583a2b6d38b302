"""
Exception types raised inside the feed pipeline.

Only the orchestrator decides whether an error is fatal; the exceptions
themselves carry no exit codes.
"""

from __future__ import annotations


class FeedError(Exception):
    """Base class for all errors raised by rhythmsfeed."""


class RenderError(FeedError):
    """A page could not be navigated to or rendered."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ListingStructureError(FeedError):
    """The listing page no longer has the expected results container."""
