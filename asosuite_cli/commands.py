"""
Command implementations for asosuite-cli.
Each cmd_*() function receives an argparse.Namespace and the AsoSuiteClient
built from the stored credential, and handles one CLI command.

Business logic lives in client.py (AsoSuiteClient). These thin wrappers
handle argparse → keyword args, format selection, and formatter dispatch.
"""

import sys

from asosuite_cli import config
from asosuite_cli._utils import _format_date
from asosuite_cli.auth import DeviceLogin, open_in_browser
from asosuite_cli.exceptions import CliError
from asosuite_cli.formatters import (
    format_apps_table,
    format_charts,
    format_events,
    format_features,
    format_keyword_metrics,
    format_ratings,
    format_related_apps,
    format_subscription,
    format_tracked_keywords,
    mutation_response,
    output,
    pretty_print,
)
from asosuite_cli.normalize import normalize_keyword_list, parse_app_locator

# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------


def _take_leading_app(ns):
    """Return the --app value, or consume the first positional if it parses as an app.

    `asosuite keywords 1606429298 "run tracker"` targets app 1606429298. A
    keyword that looks like an app id is taken as the app; pass --app to
    disambiguate.
    """
    if getattr(ns, "app", None):
        return ns.app
    if getattr(ns, "planned", None):
        return None
    rest = ns.args
    if rest:
        locator = parse_app_locator(rest[0])
        if locator is not None:
            ns.args = rest[1:]
            return locator
    return None


def _reject_extra(args):
    if args:
        raise CliError(f"[ERROR] Unknown arguments: {' '.join(args)}")


def _app_label(app):
    app_id = getattr(app, "app_id", None)
    if app_id:
        return app_id
    locator = parse_app_locator(app)
    return locator.app_id if locator else str(app)


# ---------------------------------------------------------------------------
# Auth commands
# ---------------------------------------------------------------------------


def _store_credential(credential):
    config.save_config(credential.to_dict())


def cmd_login(ns, client):
    fmt = ns.format
    # Keep stdout clean for the JSON result.
    echo = print if fmt != "json" else (lambda line="": print(line, file=sys.stderr))
    flow = DeviceLogin(
        client,
        _store_credential,
        echo=echo,
        open_browser=None if ns.no_open else open_in_browser,
    )
    credential = flow.run()
    if fmt == "json":
        pretty_print(
            {"ok": True, "expiresAt": credential.expires_at, "configPath": config.CONFIG_PATH}
        )
        return
    print("Authenticated successfully.")
    print(f"Token expires at: {_format_date(credential.expires_at)}")
    print(f"Stored config: {config.CONFIG_PATH}")


def cmd_logout(ns, client):
    config.save_config({})
    if ns.format == "json":
        pretty_print({"ok": True, "configPath": config.CONFIG_PATH})
        return
    print(f"Cleared local credentials from {config.CONFIG_PATH}")


def cmd_subscription(ns, client):
    output(client.get_subscription(), format_subscription, ns.format)


# ---------------------------------------------------------------------------
# Apps
# ---------------------------------------------------------------------------


def cmd_search_apps(ns, client):
    result = client.search_apps(
        term=" ".join(ns.term),
        region=ns.region,
        platform=ns.platform,
        page=ns.page,
    )
    output(result, format_apps_table, ns.format)


def cmd_list_apps(ns, client):
    output(client.list_apps(page=ns.page), format_apps_table, ns.format)


def cmd_track_app(ns, client):
    result = client.track_app(app=ns.app, region=ns.region, platform=ns.platform)
    mutation_response(f"Tracking app {_app_label(ns.app)}", result, ns.format)


def cmd_untrack_app(ns, client):
    result = client.untrack_app(app=ns.app)
    mutation_response(f"Stopped tracking app {_app_label(ns.app)}", result, ns.format)


def cmd_plan_app(ns, client):
    result = client.plan_app(planned_id=ns.planned_id, name=ns.name)
    mutation_response(f"Planned app {ns.planned_id.strip()} added", result, ns.format)


def cmd_unplan_app(ns, client):
    result = client.unplan_app(planned_id=ns.planned_id)
    mutation_response(f"Planned app {ns.planned_id.strip()} removed", result, ns.format)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


def cmd_keywords(ns, client):
    app = _take_leading_app(ns)
    result = client.keyword_metrics(
        keywords=ns.args,
        app=app,
        region=ns.region,
        platform=ns.platform,
    )
    output(result, format_keyword_metrics, ns.format)


def cmd_tracked_keywords(ns, client):
    app = _take_leading_app(ns)
    target = {"app": app, "planned_id": ns.planned, "region": ns.region, "platform": ns.platform}
    action = ns.action
    if action == "list":
        _reject_extra(ns.args)
        output(client.list_tracked_keywords(**target), format_tracked_keywords, ns.format)
        return
    count = len(normalize_keyword_list(ns.args))
    if action == "add":
        result = client.add_tracked_keywords(keywords=ns.args, **target)
        mutation_response(f"Tracked keywords added ({count})", result, ns.format)
        return
    result = client.remove_tracked_keywords(keywords=ns.args, **target)
    mutation_response(f"Tracked keywords removed ({count})", result, ns.format)


# ---------------------------------------------------------------------------
# Related apps / events
# ---------------------------------------------------------------------------


def _require_app(app, command):
    if app is None:
        raise CliError(
            f"[ERROR] {command} needs an app. Pass --app <APP_ID_OR_URL> or put it first."
        )
    return app


def cmd_related_apps(ns, client):
    app = _require_app(_take_leading_app(ns), f"related-apps {ns.action}")
    if ns.action == "list":
        _reject_extra(ns.args)
        result = client.list_related_apps(app=app, region=ns.region)
        output(result, format_related_apps, ns.format)
        return
    if not ns.args:
        raise CliError(f"[ERROR] related-apps {ns.action} needs the related app id or URL.")
    related, extra = ns.args[0], ns.args[1:]
    _reject_extra(extra)
    if ns.action == "add":
        result = client.add_related_app(app=app, related_app=related, region=ns.region)
        summary = f"Related app {_app_label(related)} added to {_app_label(app)}"
    else:
        result = client.remove_related_app(app=app, related_app=related, region=ns.region)
        summary = f"Related app {_app_label(related)} removed from {_app_label(app)}"
    mutation_response(summary, result, ns.format)


def cmd_events(ns, client):
    if ns.action == "delete":
        if len(ns.args) != 1:
            raise CliError("[ERROR] Usage: asosuite events delete <EVENT_ID>")
        result = client.delete_event(event_id=ns.args[0])
        mutation_response(f"Event {ns.args[0]} deleted", result, ns.format)
        return
    app = _take_leading_app(ns)
    if ns.action == "list":
        _reject_extra(ns.args)
        result = client.list_events(
            app=app, region=ns.region, date_from=ns.date_from, date_to=ns.date_to
        )
        output(result, format_events, ns.format)
        return
    app = _require_app(app, "events add")
    title = ns.title if ns.title is not None else " ".join(ns.args)
    if ns.title is not None:
        _reject_extra(ns.args)
    result = client.add_event(
        app=app, date=ns.date, title=title, note=ns.note, region=ns.region
    )
    mutation_response(f"Event added for {_app_label(app)} on {ns.date}", result, ns.format)


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------


def cmd_charts(ns, client):
    result = client.get_charts(
        region=ns.region,
        platform=ns.platform,
        chart=ns.chart,
        category=ns.category,
        date=ns.date,
    )
    output(result, format_charts, ns.format)


def cmd_features(ns, client):
    app = _require_app(_take_leading_app(ns), "features")
    _reject_extra(ns.args)
    result = client.get_features(
        app=app, region=ns.region, platform=ns.platform, period=ns.period
    )
    output(result, format_features, ns.format)


def cmd_ratings(ns, client):
    app = _require_app(_take_leading_app(ns), "ratings")
    _reject_extra(ns.args)
    result = client.get_ratings(app=app, region=ns.region, period=ns.period)
    output(result, format_ratings, ns.format)
