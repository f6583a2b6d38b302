"""
rhythmsfeed

Fetches the 5Rhythms event listing and turns it into a clean JSON feed of
current and upcoming events.
"""

__version__ = "0.1.0"
