"""Write tools: app tracking, tracked keywords, related apps and events (10 tools)."""

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


def track_app(app: str, region: str | None = None, platform: Platform | None = None) -> dict:
    """Start tracking a store app (id, idNNNN or App Store URL)."""
    return _finalize_tool_result(_call("track_app", app=app, region=region, platform=platform))


def untrack_app(app: str) -> dict:
    """Stop tracking a store app."""
    return _finalize_tool_result(_call("untrack_app", app=app))


def plan_app(planned_id: str, name: str | None = None) -> dict:
    """Register a planned (not yet released) app under a free-form id (max 64 chars)."""
    try:
        _validate_text(name, "name", max_length=200)
    except CliError as e:
        return _contract_error(str(e))
    return _finalize_tool_result(_call("plan_app", planned_id=planned_id, name=name))


def unplan_app(planned_id: str) -> dict:
    """Remove a planned app."""
    return _finalize_tool_result(_call("unplan_app", planned_id=planned_id))


def add_tracked_keywords(
    keywords: list[str],
    app: str | None = None,
    planned_id: str | None = None,
    region: str | None = None,
    platform: Platform | None = None,
) -> dict:
    """Track up to 200 keywords for a store app or a planned app. Give app or planned_id."""
    return _finalize_tool_result(
        _call(
            "add_tracked_keywords",
            keywords=keywords,
            app=app,
            planned_id=planned_id,
            region=region,
            platform=platform,
        )
    )


def remove_tracked_keywords(
    keywords: list[str],
    app: str | None = None,
    planned_id: str | None = None,
    region: str | None = None,
    platform: Platform | None = None,
) -> dict:
    """Stop tracking keywords for a store app or a planned app."""
    return _finalize_tool_result(
        _call(
            "remove_tracked_keywords",
            keywords=keywords,
            app=app,
            planned_id=planned_id,
            region=region,
            platform=platform,
        )
    )


def add_related_app(app: str, related_app: str, region: str | None = None) -> dict:
    """Mark related_app as related to app. Both accept id, idNNNN or App Store URL."""
    return _finalize_tool_result(
        _call("add_related_app", app=app, related_app=related_app, region=region)
    )


def remove_related_app(app: str, related_app: str, region: str | None = None) -> dict:
    """Remove a related-app link."""
    return _finalize_tool_result(
        _call("remove_related_app", app=app, related_app=related_app, region=region)
    )


def add_event(
    app: str,
    date: str,
    title: str,
    note: str | None = None,
    region: str | None = None,
) -> dict:
    """Record an app event (release, campaign, ...) on a YYYY-MM-DD date.

    Args:
        title: Short event title (max 200 chars).
        note: Optional free-text note (max 2000 chars).
    """
    try:
        _validate_text(title, "title", max_length=200)
        _validate_text(note, "note", max_length=2000)
    except CliError as e:
        return _contract_error(str(e))
    return _finalize_tool_result(
        _call("add_event", app=app, date=date, title=title, note=note, region=region)
    )


def delete_event(event_id: str) -> dict:
    """Delete an app event by id."""
    return _finalize_tool_result(_call("delete_event", event_id=event_id))


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(track_app)
    mcp.tool()(untrack_app)
    mcp.tool()(plan_app)
    mcp.tool()(unplan_app)
    mcp.tool()(add_tracked_keywords)
    mcp.tool()(remove_tracked_keywords)
    mcp.tool()(add_related_app)
    mcp.tool()(remove_related_app)
    mcp.tool()(add_event)
    mcp.tool()(delete_event)
