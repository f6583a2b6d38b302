"""
Runtime configuration.

All values are plain module constants so that every module reads the same
settings. Each one can be overridden through an environment variable, which
is handy for debugging against a saved copy of the listing or for slowing
the scraper down even further.
"""

from __future__ import annotations

import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    return int(_env_float(name, float(default)))


# ---------------------------------------------------------------------------
# Source
# ---------------------------------------------------------------------------

BASE_URL = os.environ.get("RHYTHMSFEED_BASE_URL") or "https://www.5rhythms.com"

SOURCE_URL = os.environ.get("RHYTHMSFEED_SOURCE_URL") or (
    "https://www.5rhythms.com/EventSearch.php?validate_event_level=&event_type_id=2"
    "&event_country=&event_state=&event_city%5B%5D=&event_days%5B%5D="
    "&event_startDate=mm%2Fdd%2Fyy&event_endDate=mm%2Fdd%2Fyy&location_lat=&location_long="
    "&findIt=FIND+IT&isAdvancedSearch=1&SearchName=&SearchEvent=&event_level_id%5B%5D="
)

# ---------------------------------------------------------------------------
# Politeness & timeouts
# ---------------------------------------------------------------------------

# Pause between two detail page visits (seconds)
FETCH_DELAY_SECONDS = max(0.0, _env_float("RHYTHMSFEED_FETCH_DELAY", 1.0))

LISTING_TIMEOUT_MS = _env_int("RHYTHMSFEED_LISTING_TIMEOUT_MS", 60000)
CONTAINER_TIMEOUT_MS = _env_int("RHYTHMSFEED_CONTAINER_TIMEOUT_MS", 30000)
DETAIL_TIMEOUT_MS = _env_int("RHYTHMSFEED_DETAIL_TIMEOUT_MS", 60000)

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

RENDERER = (os.environ.get("RHYTHMSFEED_RENDERER") or "playwright").strip().lower()
HEADLESS = os.environ.get("RHYTHMSFEED_HEADLESS", "1") != "0"

USER_AGENT = os.environ.get("RHYTHMSFEED_USER_AGENT") or (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
