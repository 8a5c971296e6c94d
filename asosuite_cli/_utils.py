"""
Shared pure-utility functions for asosuite-cli.

These helpers have no business logic and no side effects.
They are used across commands.py and the formatters.
"""

from datetime import datetime, timezone


def _parse_iso_timestamp(ts):
    """Parse an ISO timestamp from the API into an aware datetime."""
    if not ts or not isinstance(ts, str):
        return None
    try:
        # Handle both "2026-01-15T10:30:00Z" and "2026-01-15T10:30:00.000Z"
        parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _format_date(iso):
    """Render an API timestamp as UTC ISO-8601 with milliseconds; 'n/a' when missing."""
    if not iso:
        return "n/a"
    parsed = _parse_iso_timestamp(iso)
    if parsed is None:
        return str(iso)
    utc = parsed.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def _items(data, key):
    """Return the list under *key*, or *data* itself when the server sent a bare list."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        value = data.get(key)
        if isinstance(value, list):
            return value
    return []
