"""
HTTP request layer for the ASO Suite CLI API.
"""

import http.client
import json
import sys
import time
import urllib.error
import urllib.parse
import urllib.request

from asosuite_cli import config
from asosuite_cli.exceptions import ApiError, CliError


class _NoContent:
    """Returned for HTTP 204 so callers can tell it apart from an empty object."""

    def __repr__(self):
        return "NO_CONTENT"

    def __bool__(self):
        return False


NO_CONTENT = _NoContent()


# ---------------------------------------------------------------------------
# Security / logging helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


# ---------------------------------------------------------------------------
# Error body parsing
# ---------------------------------------------------------------------------


def _looks_like_html(text):
    normalized = text.strip().lower()
    return (
        normalized.startswith("<!doctype html")
        or normalized.startswith("<html")
        or "<body" in normalized
    )


def _response_origin(url):
    """scheme://host[:port] of the URL that answered, or the configured API origin."""
    parsed = urllib.parse.urlsplit(url or "")
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    return config.API_BASE_URL


def _read_error_body(err):
    try:
        raw = err.read(config.HTTP_MAX_RESPONSE_BYTES) if err.fp else b""
    except (OSError, ValueError, http.client.HTTPException):
        return ""
    return raw.decode("utf-8", errors="replace")


def _parse_error_response(status, reason, text, url):
    """Turn an error body into (message, payload)."""
    status_text = f"{status} {reason}".strip()
    if not text:
        return status_text, None

    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    else:
        if isinstance(parsed, dict) and isinstance(parsed.get("error"), str):
            return parsed["error"], parsed
        return text, parsed

    if _looks_like_html(text):
        return (
            f"Request failed ({status_text}). "
            f"Received HTML response from {_response_origin(url)}.",
            None,
        )
    return text, None


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _build_url(path, query=None):
    url = config.API_BASE_URL + path
    if query:
        pairs = [(k, v) for k, v in query.items() if v is not None]
        if pairs:
            url += "?" + urllib.parse.urlencode(pairs)
    return url


def api_request(path, method="GET", body=None, access_token=None, query=None):
    """Send one JSON request to the API and decode the response.

    Returns the parsed JSON value, the raw text for non-JSON responses, or
    NO_CONTENT for 204. Raises ApiError for HTTP errors and CliError for
    connection failures. Never retries.
    """
    url = _build_url(path, query)
    headers = {"Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    data = None
    if body is not None:
        headers["Content-Type"] = "application/json"
        data = json.dumps(body).encode("utf-8")

    req = urllib.request.Request(url, data=data, headers=headers, method=method)
    kwargs = {}
    if config.HTTP_TIMEOUT_SECONDS:
        kwargs["timeout"] = config.HTTP_TIMEOUT_SECONDS

    start = time.perf_counter()
    _log_http_event(
        phase="request",
        method=method,
        url=url,
        token=_mask_token(access_token) if access_token else None,
    )
    try:
        with urllib.request.urlopen(req, **kwargs) as resp:
            status = getattr(resp, "status", 200)
            content_type = resp.headers.get("Content-Type", "") or ""
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            _log_http_event(
                phase="response",
                method=method,
                url=url,
                status=status,
                content_type=content_type,
                bytes=len(raw),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
            )
    except urllib.error.HTTPError as e:
        text = _read_error_body(e)
        _log_http_event(
            phase="response",
            method=method,
            url=url,
            status=e.code,
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        response_url = e.geturl() if hasattr(e, "geturl") else url
        message, payload = _parse_error_response(e.code, e.reason or "", text, response_url)
        raise ApiError(message, e.code, payload, origin=_response_origin(response_url)) from e
    except TimeoutError as e:
        _log_http_event(phase="network_error", method=method, url=url, error="timeout")
        raise CliError(
            f"[ERROR] Request timed out after {config.HTTP_TIMEOUT_SECONDS} seconds. "
            f"Is {config.API_BASE_URL} reachable?"
        ) from e
    except urllib.error.URLError as e:
        _log_http_event(phase="network_error", method=method, url=url, error=str(e.reason))
        raise CliError(f"[ERROR] Connection failed: {e.reason}") from e

    if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
        raise CliError(
            "[ERROR] Response too large from ASO Suite API "
            f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
        )
    if status == 204:
        return NO_CONTENT

    text = raw.decode("utf-8", errors="replace")
    if "application/json" in content_type.lower():
        try:
            return json.loads(text)
        except ValueError:
            raise CliError(
                "[ERROR] Unexpected response from ASO Suite API (not valid JSON)."
            ) from None
    return text
