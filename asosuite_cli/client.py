"""
AsoSuiteClient — public Python API for the ASO Suite CLI endpoints.

Single entry point for the command handlers and the MCP server.
Inputs are validated locally before any network call; all methods return
the server's JSON (plain dicts) suitable for JSON serialization.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from asosuite_cli import config
from asosuite_cli.api import NO_CONTENT, api_request
from asosuite_cli.exceptions import CliError, SetupError
from asosuite_cli.models import AppLocator
from asosuite_cli.normalize import (
    normalize_date_only,
    normalize_keyword,
    normalize_keyword_list,
    normalize_period,
    normalize_planned_id,
    normalize_platform,
    normalize_region,
    parse_app_locator,
)
from asosuite_cli.types import DeviceAuthStart, TokenResponse

# ---------------------------------------------------------------------------
# Validation helpers (turn normalizer misses into option-specific errors)
# ---------------------------------------------------------------------------


def _resolve_region(value):
    if value is None:
        return config.DEFAULT_REGION
    region = normalize_region(value)
    if region is None:
        raise CliError(
            f"[ERROR] Invalid --region value '{value}'. Use a two-letter country code (e.g. US, SE)."
        )
    return region


def _resolve_platform(value):
    platform = normalize_platform(value, config.DEFAULT_PLATFORM)
    if platform is None:
        raise CliError(
            "[ERROR] Invalid --platform value. "
            f"Supported values: {', '.join(config.SUPPORTED_PLATFORMS)}"
        )
    return platform


def _resolve_app(value, option="--app"):
    """Accept an AppLocator or anything parse_app_locator understands."""
    if isinstance(value, AppLocator):
        if value.is_planned:
            raise CliError(f"[ERROR] {option} needs a store app id, not a planned app.")
        return value
    locator = parse_app_locator(value)
    if locator is None:
        raise CliError(
            f"[ERROR] Invalid {option} value. "
            "Use an App Store URL, id-prefixed value, or numeric id."
        )
    return locator


def _resolve_planned(value):
    planned = normalize_planned_id(value)
    if planned is None:
        raise CliError(
            "[ERROR] Invalid --planned value. Use a non-empty id of at most "
            f"{config.PLANNED_ID_MAX_LENGTH} characters."
        )
    return planned


def _resolve_target(app, planned_id):
    """Exactly one of a store app or a planned app."""
    if app is not None and planned_id is not None:
        raise CliError("[ERROR] Use either --app or --planned, not both.")
    if planned_id is not None:
        return AppLocator(planned_app_id=_resolve_planned(planned_id))
    if app is None:
        raise CliError("[ERROR] Provide an app (--app <APP_ID_OR_URL>) or --planned <ID>.")
    return _resolve_app(app)


def _resolve_date(value, option):
    if value is None:
        return None
    date = normalize_date_only(value)
    if date is None:
        raise CliError(f"[ERROR] Invalid {option} value '{value}'. Use YYYY-MM-DD.")
    return date


def _resolve_period(value):
    if value is None:
        return None
    period = normalize_period(value)
    if period is None:
        raise CliError(
            "[ERROR] Invalid --period value. "
            f"Supported values: {', '.join(str(p) for p in config.VALID_PERIODS)}"
        )
    return period


def check_keyword_count(keywords, limit):
    """Normalize *keywords* and enforce 1..limit entries."""
    normalized = normalize_keyword_list(keywords)
    if not normalized:
        raise CliError("[ERROR] Provide at least one keyword")
    if len(normalized) > limit:
        raise CliError(f"[ERROR] At most {limit} keywords are allowed per request")
    return normalized


def _mutation_result(result):
    if result is NO_CONTENT or result is None:
        return {"ok": True}
    if isinstance(result, dict):
        return result
    return {"ok": True, "result": result}


def _quote(segment):
    return urllib.parse.quote(str(segment), safe="")


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class AsoSuiteClient:
    """Public API surface for ASO Suite.

    All methods use keyword-only arguments and return plain dicts
    suitable for JSON serialization. Raises CliError/SetupError on failure.
    """

    def __init__(self, *, access_token=None):
        """Initialize the client.

        Args:
            access_token: Bearer token from the credential file. Only the
                login endpoints work without one.
        """
        self.access_token = access_token

    # -------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------

    def _token(self) -> str:
        if not self.access_token:
            raise SetupError("[SETUP_NEEDED] Not authenticated. Run `asosuite login` first.")
        return self.access_token

    def _get(self, path, query=None):
        return api_request(path, "GET", access_token=self._token(), query=query)

    def _send(self, path, method, body=None):
        return api_request(path, method, body=body, access_token=self._token())

    # -------------------------------------------------------------------
    # Device login
    # -------------------------------------------------------------------

    def start_device_auth(self) -> DeviceAuthStart:
        return api_request("/api/cli/auth/start", "POST")

    def poll_device_token(self, device_code: str) -> TokenResponse:
        return api_request("/api/cli/auth/token", "POST", body={"deviceCode": device_code})

    # -------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------

    def get_subscription(self) -> dict[str, Any]:
        """Plan, active flag, subscriber flag, billing period, expiry, subscribeUrl."""
        return self._get("/api/cli/subscription")  # type: ignore[no-any-return]

    # -------------------------------------------------------------------
    # Apps
    # -------------------------------------------------------------------

    def search_apps(
        self,
        *,
        term: str,
        region: str | None = None,
        platform: str | None = None,
        page: int | None = None,
    ) -> dict[str, Any]:
        """Search the store for apps matching *term*."""
        cleaned = normalize_keyword(term)
        if not cleaned:
            raise CliError("[ERROR] Provide a search term.")
        query = {
            "term": cleaned,
            "region": _resolve_region(region),
            "platform": _resolve_platform(platform),
            "page": page,
        }
        return self._get("/api/cli/apps/search", query)  # type: ignore[no-any-return]

    def list_apps(self, *, page: int | None = None) -> dict[str, Any]:
        """Tracked and planned apps of the authenticated user (one page)."""
        return self._get("/api/cli/apps", {"page": page})  # type: ignore[no-any-return]

    def track_app(
        self,
        *,
        app: str | AppLocator,
        region: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any]:
        locator = _resolve_app(app)
        body = {
            "appId": locator.app_id,
            "region": _resolve_region(region),
            "platform": _resolve_platform(platform),
        }
        return _mutation_result(self._send("/api/cli/apps", "POST", body))

    def untrack_app(self, *, app: str | AppLocator) -> dict[str, Any]:
        locator = _resolve_app(app)
        return _mutation_result(self._send(f"/api/cli/apps/{_quote(locator.app_id)}", "DELETE"))

    def plan_app(self, *, planned_id: str, name: str | None = None) -> dict[str, Any]:
        """Register an app that is not yet live in the store."""
        body: dict[str, Any] = {"plannedTrackedAppId": _resolve_planned(planned_id)}
        if name is not None and name.strip():
            body["name"] = name.strip()
        return _mutation_result(self._send("/api/cli/planned-apps", "POST", body))

    def unplan_app(self, *, planned_id: str) -> dict[str, Any]:
        planned = _resolve_planned(planned_id)
        return _mutation_result(
            self._send(f"/api/cli/planned-apps/{_quote(planned)}", "DELETE")
        )

    # -------------------------------------------------------------------
    # Keywords
    # -------------------------------------------------------------------

    def keyword_metrics(
        self,
        *,
        keywords: list[str],
        app: str | AppLocator | None = None,
        region: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any]:
        """Popularity and difficulty per keyword; ranking position when *app* is given."""
        normalized = check_keyword_count(keywords, config.MAX_METRICS_KEYWORDS)
        locator = _resolve_app(app) if app is not None else None
        body = {
            "region": _resolve_region(region),
            "keywords": normalized,
            "appId": locator.app_id if locator else None,
            "platform": _resolve_platform(platform),
        }
        return self._send("/api/cli/keywords/metrics", "POST", body)  # type: ignore[no-any-return]

    def list_tracked_keywords(
        self,
        *,
        app: str | AppLocator | None = None,
        planned_id: str | None = None,
        region: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any]:
        target = _resolve_target(app, planned_id)
        query = dict(target.to_payload())
        query["region"] = _resolve_region(region)
        query["platform"] = _resolve_platform(platform)
        return self._get("/api/cli/tracked-keywords", query)  # type: ignore[no-any-return]

    def _tracked_keywords_body(self, keywords, app, planned_id, region, platform):
        normalized = check_keyword_count(keywords, config.MAX_TRACKED_KEYWORDS)
        body = dict(_resolve_target(app, planned_id).to_payload())
        body["region"] = _resolve_region(region)
        body["platform"] = _resolve_platform(platform)
        body["keywords"] = normalized
        return body

    def add_tracked_keywords(
        self,
        *,
        keywords: list[str],
        app: str | AppLocator | None = None,
        planned_id: str | None = None,
        region: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any]:
        body = self._tracked_keywords_body(keywords, app, planned_id, region, platform)
        return _mutation_result(self._send("/api/cli/tracked-keywords", "POST", body))

    def remove_tracked_keywords(
        self,
        *,
        keywords: list[str],
        app: str | AppLocator | None = None,
        planned_id: str | None = None,
        region: str | None = None,
        platform: str | None = None,
    ) -> dict[str, Any]:
        body = self._tracked_keywords_body(keywords, app, planned_id, region, platform)
        return _mutation_result(self._send("/api/cli/tracked-keywords", "DELETE", body))

    # -------------------------------------------------------------------
    # Related apps
    # -------------------------------------------------------------------

    def list_related_apps(
        self, *, app: str | AppLocator, region: str | None = None
    ) -> dict[str, Any]:
        locator = _resolve_app(app)
        query = {"appId": locator.app_id, "region": _resolve_region(region)}
        return self._get("/api/cli/related-apps", query)  # type: ignore[no-any-return]

    def _related_body(self, app, related_app, region):
        locator = _resolve_app(app)
        if related_app is None:
            raise CliError("[ERROR] Provide the related app (id, idNNNN or App Store URL).")
        related = _resolve_app(related_app, option="related app")
        if related.app_id == locator.app_id:
            raise CliError("[ERROR] An app cannot be related to itself.")
        return {
            "appId": locator.app_id,
            "relatedAppId": related.app_id,
            "region": _resolve_region(region),
        }

    def add_related_app(
        self,
        *,
        app: str | AppLocator,
        related_app: str | AppLocator,
        region: str | None = None,
    ) -> dict[str, Any]:
        body = self._related_body(app, related_app, region)
        return _mutation_result(self._send("/api/cli/related-apps", "POST", body))

    def remove_related_app(
        self,
        *,
        app: str | AppLocator,
        related_app: str | AppLocator,
        region: str | None = None,
    ) -> dict[str, Any]:
        body = self._related_body(app, related_app, region)
        return _mutation_result(self._send("/api/cli/related-apps", "DELETE", body))

    # -------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------

    def list_events(
        self,
        *,
        app: str | AppLocator | None = None,
        region: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> dict[str, Any]:
        """Editorial/app events, optionally filtered to one app and a date range."""
        start = _resolve_date(date_from, "--from")
        end = _resolve_date(date_to, "--to")
        if start and end and start > end:
            raise CliError("[ERROR] --from must not be after --to.")
        query = {
            "appId": _resolve_app(app).app_id if app is not None else None,
            "region": _resolve_region(region) if region is not None else None,
            "from": start,
            "to": end,
        }
        return self._get("/api/cli/events", query)  # type: ignore[no-any-return]

    def add_event(
        self,
        *,
        app: str | AppLocator,
        date: str,
        title: str,
        note: str | None = None,
        region: str | None = None,
    ) -> dict[str, Any]:
        locator = _resolve_app(app)
        event_date = _resolve_date(date, "--date")
        if event_date is None:
            raise CliError("[ERROR] Missing --date (YYYY-MM-DD).")
        cleaned_title = " ".join((title or "").split())
        if not cleaned_title:
            raise CliError("[ERROR] Missing --title.")
        body: dict[str, Any] = {
            "appId": locator.app_id,
            "region": _resolve_region(region),
            "date": event_date,
            "title": cleaned_title,
        }
        if note is not None and note.strip():
            body["note"] = note.strip()
        return _mutation_result(self._send("/api/cli/events", "POST", body))

    def delete_event(self, *, event_id: str) -> dict[str, Any]:
        cleaned = (event_id or "").strip()
        if not cleaned:
            raise CliError("[ERROR] Provide an event id.")
        return _mutation_result(self._send(f"/api/cli/events/{_quote(cleaned)}", "DELETE"))

    # -------------------------------------------------------------------
    # Market data
    # -------------------------------------------------------------------

    def get_charts(
        self,
        *,
        region: str | None = None,
        platform: str | None = None,
        chart: str = "free",
        category: str | None = None,
        date: str | None = None,
    ) -> dict[str, Any]:
        """Top chart rankings for one region/platform/chart (optionally a category and day)."""
        chart_name = (chart or "").strip().lower()
        if chart_name not in config.VALID_CHARTS:
            raise CliError(
                f"[ERROR] Invalid --chart value. Supported values: {', '.join(config.VALID_CHARTS)}"
            )
        query = {
            "region": _resolve_region(region),
            "platform": _resolve_platform(platform),
            "chart": chart_name,
            "category": (category or "").strip() or None,
            "date": _resolve_date(date, "--date"),
        }
        return self._get("/api/cli/charts", query)  # type: ignore[no-any-return]

    def get_features(
        self,
        *,
        app: str | AppLocator,
        region: str | None = None,
        platform: str | None = None,
        period: int | str | None = None,
    ) -> dict[str, Any]:
        """Editorial features (Today tab, collections) for an app over a period."""
        locator = _resolve_app(app)
        query = {
            "appId": locator.app_id,
            "region": _resolve_region(region),
            "platform": _resolve_platform(platform),
            "period": _resolve_period(period),
        }
        return self._get("/api/cli/features", query)  # type: ignore[no-any-return]

    def get_ratings(
        self,
        *,
        app: str | AppLocator,
        region: str | None = None,
        period: int | str | None = None,
    ) -> dict[str, Any]:
        locator = _resolve_app(app)
        query = {
            "appId": locator.app_id,
            "region": _resolve_region(region),
            "period": _resolve_period(period),
        }
        return self._get("/api/cli/ratings", query)  # type: ignore[no-any-return]
