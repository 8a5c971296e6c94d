"""Read tools: account, apps, keywords and market data (10 tools)."""

from __future__ import annotations

from typing import Literal

from asosuite_cli import CliError
from asosuite_cli.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_text,
)

Platform = Literal["iphone", "ipad", "mac", "appletv", "watch", "vision"]


def get_subscription() -> dict:
    """Get the subscription status of the logged-in account.

    Returns:
        Dict with plan, active, subscriber, billingPeriod, expiresAt, subscribeUrl.
    """
    return _finalize_tool_result(_call("get_subscription"))


def search_apps(
    term: str,
    region: str | None = None,
    platform: Platform | None = None,
    page: int | None = None,
) -> dict:
    """Search the App Store for apps.

    Args:
        term: Search text (app name or keyword).
        region: Two-letter country code (default US).
        page: 1-based result page.
    """
    try:
        _validate_text(term, "term")
    except CliError as e:
        return _contract_error(str(e))
    return _finalize_tool_result(
        _call("search_apps", term=term, region=region, platform=platform, page=page)
    )


def list_apps(page: int | None = None) -> dict:
    """List tracked and planned apps of the account (one page)."""
    return _finalize_tool_result(_call("list_apps", page=page))


def keyword_metrics(
    keywords: list[str],
    app: str | None = None,
    region: str | None = None,
    platform: Platform | None = None,
) -> dict:
    """Popularity and difficulty for up to 50 keywords.

    Args:
        keywords: Keywords to look up (whitespace and quotes normalized).
        app: Optional app id, idNNNN or App Store URL. Adds the app's rank per keyword.

    Returns:
        Dict with region, platform, appId and metrics (list of metric rows).
        Metrics may be null while the server is still computing them.
    """
    return _finalize_tool_result(
        _call("keyword_metrics", keywords=keywords, app=app, region=region, platform=platform)
    )


def list_tracked_keywords(
    app: str | None = None,
    planned_id: str | None = None,
    region: str | None = None,
    platform: Platform | None = None,
) -> dict:
    """List tracked keywords of a store app (app) or a planned app (planned_id). Give one."""
    return _finalize_tool_result(
        _call(
            "list_tracked_keywords",
            app=app,
            planned_id=planned_id,
            region=region,
            platform=platform,
        )
    )


def list_related_apps(app: str, region: str | None = None) -> dict:
    """List apps marked as related (competitors) to an app."""
    return _finalize_tool_result(_call("list_related_apps", app=app, region=region))


def list_events(
    app: str | None = None,
    region: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> dict:
    """List app events, optionally for one app.

    Args:
        date_from/date_to: Inclusive YYYY-MM-DD bounds.
    """
    return _finalize_tool_result(
        _call("list_events", app=app, region=region, date_from=date_from, date_to=date_to)
    )


def get_charts(
    region: str | None = None,
    platform: Platform | None = None,
    chart: Literal["free", "paid", "grossing"] = "free",
    category: str | None = None,
    date: str | None = None,
) -> dict:
    """Top chart for a region/platform. date is YYYY-MM-DD (default: latest)."""
    return _finalize_tool_result(
        _call(
            "get_charts",
            region=region,
            platform=platform,
            chart=chart,
            category=category,
            date=date,
        )
    )


def get_features(
    app: str,
    region: str | None = None,
    platform: Platform | None = None,
    period: Literal[7, 30, 90] | None = None,
) -> dict:
    """Editorial features of an app over the last 7, 30 or 90 days."""
    return _finalize_tool_result(
        _call("get_features", app=app, region=region, platform=platform, period=period)
    )


def get_ratings(
    app: str,
    region: str | None = None,
    period: Literal[7, 30, 90] | None = None,
) -> dict:
    """Rating average, count and distribution of an app over a period."""
    return _finalize_tool_result(_call("get_ratings", app=app, region=region, period=period))


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(get_subscription)
    mcp.tool()(search_apps)
    mcp.tool()(list_apps)
    mcp.tool()(keyword_metrics)
    mcp.tool()(list_tracked_keywords)
    mcp.tool()(list_related_apps)
    mcp.tool()(list_events)
    mcp.tool()(get_charts)
    mcp.tool()(get_features)
    mcp.tool()(get_ratings)
