"""
Input normalizers for command-line values.

Every function here is pure and total: malformed input yields None instead
of raising, and the caller decides which option to blame in the error.
"""

import re
import urllib.parse
from datetime import datetime, timezone

from asosuite_cli import config
from asosuite_cli.models import AppLocator

_REGION_RE = re.compile(r"^[A-Z]{2}$", re.ASCII)
_PREFIXED_ID_RE = re.compile(
    rf"^id(\d{{{config.APP_ID_MIN_LENGTH},}})$", re.IGNORECASE | re.ASCII
)
_RAW_ID_RE = re.compile(rf"^(\d{{{config.APP_ID_MIN_LENGTH},}})$", re.ASCII)
_PATH_ID_RE = re.compile(
    rf"/id(\d{{{config.APP_ID_MIN_LENGTH},}})(?:/|$)", re.IGNORECASE | re.ASCII
)
_EMBEDDED_ID_RE = re.compile(
    rf"\bid(\d{{{config.APP_ID_MIN_LENGTH},}})\b", re.IGNORECASE | re.ASCII
)
_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_QUOTES_RE = re.compile(r"^[\"']+|[\"']+$")
_WS_RE = re.compile(r"\s+")


def _text(raw):
    if raw is None:
        return ""
    return str(raw).strip()


def normalize_region(raw):
    """'se' -> 'SE'. Anything but exactly two ASCII letters -> None."""
    value = _text(raw)
    if not value.isascii():
        return None
    value = value.upper()
    if not _REGION_RE.match(value):
        return None
    return value


def normalize_platform(raw, default=None):
    """Case-insensitive platform lookup. Missing input yields *default*."""
    if raw is None:
        return default
    value = _text(raw).lower()
    if value not in config.SUPPORTED_PLATFORMS:
        return None
    return value


def _app_id_from_url(value):
    """Extract /idNNNNNN/ from an absolute URL path. Non-URLs yield None."""
    try:
        parsed = urllib.parse.urlsplit(value)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    match = _PATH_ID_RE.search(parsed.path)
    return match.group(1) if match else None


def parse_app_locator(raw):
    """Resolve a numeric store id from an id, idNNN token, App Store URL or free text.

    Tries, in order: ``id123456``, ``123456``, a URL whose path contains
    ``/id123456``, then any ``id123456`` word inside the string. Returns an
    AppLocator for the first match, or None.
    """
    value = _text(raw)
    if not value:
        return None

    for pattern in (_PREFIXED_ID_RE, _RAW_ID_RE):
        match = pattern.match(value)
        if match:
            return AppLocator(app_id=match.group(1))

    from_url = _app_id_from_url(value)
    if from_url:
        return AppLocator(app_id=from_url)

    match = _EMBEDDED_ID_RE.search(value)
    if match:
        return AppLocator(app_id=match.group(1))
    return None


def normalize_planned_id(raw):
    """Strip every whitespace char; reject empty or over-long ids."""
    value = _WS_RE.sub("", _text(raw))
    if not value or len(value) > config.PLANNED_ID_MAX_LENGTH:
        return None
    return value


def normalize_keyword(raw):
    value = _QUOTES_RE.sub("", _text(raw))
    return _WS_RE.sub(" ", value).strip()


def normalize_keyword_list(raw_list):
    """Normalize keywords in order, dropping the ones that end up empty."""
    keywords = []
    for raw in raw_list or []:
        keyword = normalize_keyword(raw)
        if keyword:
            keywords.append(keyword)
    return keywords


def normalize_date_only(raw):
    """Accept an exact YYYY-MM-DD that is a real calendar date."""
    value = _text(raw)
    if not _DATE_RE.match(value):
        return None
    try:
        datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None
    return value


def normalize_period(raw):
    """Only 7, 30 or 90 (days) are valid."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = _text(raw)
        if not (text.isascii() and text.isdecimal()):
            return None
        value = int(text)
    if value not in config.VALID_PERIODS:
        return None
    return value
