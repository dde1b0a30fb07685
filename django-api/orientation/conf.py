"""App settings, read from ``settings.ORIENTATION`` with defaults."""

from django.conf import settings

DEFAULTS = {
    "REFRESH_INTERVAL_SECONDS": 10,
    "MAX_UPCOMING_SESSIONS": 5,
    "ENDING_SOON_MINUTES": 15,
    "SCAN_HISTORY_LIMIT": 100,
    "SCAN_HISTORY_MAX_LIMIT": 500,
    "SNAPSHOT_CACHE_TIMEOUT": 30,
}


def get_setting(name: str):
    if name not in DEFAULTS:
        raise KeyError(f"Unknown orientation setting: {name}")
    overrides = getattr(settings, "ORIENTATION", {}) or {}
    return overrides.get(name, DEFAULTS[name])
