"""Formatters for app lists: search results, tracked apps, related apps."""

from asosuite_cli._utils import _items
from asosuite_cli.formatters._table import _table, _trunc


def _app_id(app):
    return str(app.get("appId") or app.get("id") or app.get("plannedTrackedAppId") or "")


def _rating(app):
    rating = app.get("rating")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return "-"
    count = app.get("ratingCount")
    if isinstance(count, int) and not isinstance(count, bool):
        return f"{rating:.1f} ({count})"
    return f"{rating:.1f}"


def format_apps_table(result):
    """Format search-apps / list-apps results.

    Accepts {"apps": [...], "page": n, "hasMore": bool} or a bare list.
    """
    apps = _items(result, "apps")
    if not apps:
        return "No apps found."
    cols = [("App ID", "<"), ("Name", "<"), ("Developer", "<"), ("Rating", ">")]
    rows = []
    for app in apps:
        name = app.get("name") or app.get("title") or ""
        if app.get("plannedTrackedAppId") and not app.get("appId"):
            name = f"{name} (planned)".strip()
        rows.append(
            (
                _app_id(app),
                _trunc(name, 40),
                _trunc(app.get("developer") or app.get("sellerName") or "", 30),
                _rating(app),
            )
        )
    footer = f"Total: {len(apps)} apps"
    if isinstance(result, dict) and result.get("hasMore"):
        page = result.get("page")
        page = page if isinstance(page, int) and not isinstance(page, bool) else 1
        footer += f" (more available: --page {page + 1})"
    return _table(cols, rows, footer)


def format_related_apps(result):
    apps = _items(result, "relatedApps") or _items(result, "apps")
    if not apps:
        return "No related apps."
    cols = [("App ID", "<"), ("Name", "<"), ("Developer", "<")]
    rows = [
        (
            _app_id(app),
            _trunc(app.get("name") or app.get("title") or "", 40),
            _trunc(app.get("developer") or app.get("sellerName") or "", 30),
        )
        for app in apps
    ]
    return _table(cols, rows, f"Total: {len(apps)} related apps")
