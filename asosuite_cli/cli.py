"""
asosuite-cli — command-line client for ASO Suite
"""

import argparse
import json
import math
import sys

from asosuite_cli import config
from asosuite_cli.client import AsoSuiteClient
from asosuite_cli.commands import (
    cmd_charts,
    cmd_events,
    cmd_features,
    cmd_keywords,
    cmd_list_apps,
    cmd_login,
    cmd_logout,
    cmd_plan_app,
    cmd_ratings,
    cmd_related_apps,
    cmd_search_apps,
    cmd_subscription,
    cmd_track_app,
    cmd_tracked_keywords,
    cmd_unplan_app,
    cmd_untrack_app,
)
from asosuite_cli.exceptions import ApiError, CliError, LoginError, SetupError

HELP_TEXT = f"""\
ASO Suite CLI

Usage:
  asosuite login [--no-open]
  asosuite logout
  asosuite subscription
  asosuite search-apps [--region <REGION>] [--platform <PLATFORM>] [--page <N>] <term...>
  asosuite list-apps [--page <N>]
  asosuite keywords [--region <REGION>] [--platform <PLATFORM>] [--app <APP_ID_OR_URL>] <keyword...>
  asosuite track-app <APP_ID_OR_URL> [--region <REGION>] [--platform <PLATFORM>]
  asosuite untrack-app <APP_ID_OR_URL>
  asosuite plan-app <PLANNED_ID> [--name <NAME>]
  asosuite unplan-app <PLANNED_ID>
  asosuite tracked-keywords list   [--app <APP> | --planned <ID>] [--region R] [--platform P]
  asosuite tracked-keywords add    [--app <APP> | --planned <ID>] [--region R] [--platform P] <keyword...>
  asosuite tracked-keywords remove [--app <APP> | --planned <ID>] [--region R] [--platform P] <keyword...>
  asosuite related-apps list   [--app] <APP> [--region R]
  asosuite related-apps add    [--app] <APP> <RELATED_APP> [--region R]
  asosuite related-apps remove [--app] <APP> <RELATED_APP> [--region R]
  asosuite events list   [<APP>] [--region R] [--from YYYY-MM-DD] [--to YYYY-MM-DD]
  asosuite events add    [--app] <APP> --date YYYY-MM-DD --title <TITLE> [--note <NOTE>] [--region R]
  asosuite events delete <EVENT_ID>
  asosuite charts [--region R] [--platform P] [--chart free|paid|grossing] [--category C] [--date D]
  asosuite features [--app] <APP> [--region R] [--platform P] [--period 7|30|90]
  asosuite ratings [--app] <APP> [--region R] [--period 7|30|90]
  asosuite help

Global flags:
  --json                  Output raw JSON instead of text tables
  --format table|json     Same as above, explicit form (default: table)
  --verbose, -v           Log HTTP requests to stderr
  --version               Show version number

Defaults: region={config.DEFAULT_REGION}, platform={config.DEFAULT_PLATFORM}
Supported platforms: {", ".join(config.SUPPORTED_PLATFORMS)}
Keyword limits: {config.MAX_METRICS_KEYWORDS} per metrics lookup, \
{config.MAX_TRACKED_KEYWORDS} per tracked-keywords add/remove

When --app is omitted, a first argument that looks like an app (numeric id,
idNNNNNN or App Store URL) is used as the app.

Examples:
  asosuite keywords keyword1 keyword2
  asosuite keywords "run tracker"
  asosuite keywords --region SE "run tracker" "calorie counter"
  asosuite keywords --app 1606429298 "run tracker"
  asosuite keywords 1606429298 "run tracker"
  asosuite keywords --platform ipad --app 1606429298 keyword1 keyword2
  asosuite keywords --app "https://apps.apple.com/us/app/watchletic-run-tracker/id1606429298" \\
      --platform ipad "run tracker"
  asosuite tracked-keywords add --planned my-next-app "habit tracker"
  asosuite events add 1606429298 --date 2026-03-01 --title "Spring update"
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --json works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "table"
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--":
            remaining.extend(argv[i:])
            break
        if argv[i] == "--version":
            print(f"asosuite-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] == "--json":
            fmt = "json"
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in ("json", "table"):
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: table, json")
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    return fmt, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def _add_market_flags(p, platform=True):
    p.add_argument("--region")
    if platform:
        p.add_argument("--platform")


def build_parser():
    parser = _SubcommandParser(
        prog="asosuite",
        description="Command-line client for ASO Suite",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    def add(name):
        return sub.add_parser(name, add_help=False)

    # --- auth ---
    p = add("login")
    p.add_argument("--no-open", action="store_true", dest="no_open")
    p.set_defaults(func=cmd_login)
    add("logout").set_defaults(func=cmd_logout)
    add("subscription").set_defaults(func=cmd_subscription)

    # --- apps ---
    p = add("search-apps")
    p.add_argument("term", nargs="+")
    _add_market_flags(p)
    p.add_argument("--page", type=_positive_int)
    p.set_defaults(func=cmd_search_apps)

    p = add("list-apps")
    p.add_argument("--page", type=_positive_int)
    p.set_defaults(func=cmd_list_apps)

    p = add("track-app")
    p.add_argument("app")
    _add_market_flags(p)
    p.set_defaults(func=cmd_track_app)

    p = add("untrack-app")
    p.add_argument("app")
    p.set_defaults(func=cmd_untrack_app)

    p = add("plan-app")
    p.add_argument("planned_id")
    p.add_argument("--name")
    p.set_defaults(func=cmd_plan_app)

    p = add("unplan-app")
    p.add_argument("planned_id")
    p.set_defaults(func=cmd_unplan_app)

    # --- keywords ---
    p = add("keywords")
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    _add_market_flags(p)
    p.set_defaults(func=cmd_keywords)

    p = add("tracked-keywords")
    p.add_argument("action", choices=["list", "add", "remove"])
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    p.add_argument("--planned")
    _add_market_flags(p)
    p.set_defaults(func=cmd_tracked_keywords)

    # --- related apps ---
    p = add("related-apps")
    p.add_argument("action", choices=["list", "add", "remove"])
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    _add_market_flags(p, platform=False)
    p.set_defaults(func=cmd_related_apps)

    # --- events ---
    p = add("events")
    p.add_argument("action", choices=["list", "add", "delete"])
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    p.add_argument("--region")
    p.add_argument("--from", dest="date_from")
    p.add_argument("--to", dest="date_to")
    p.add_argument("--date")
    p.add_argument("--title")
    p.add_argument("--note")
    p.set_defaults(func=cmd_events)

    # --- market data ---
    p = add("charts")
    _add_market_flags(p)
    p.add_argument("--chart", default="free")
    p.add_argument("--category")
    p.add_argument("--date")
    p.set_defaults(func=cmd_charts)

    p = add("features")
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    _add_market_flags(p)
    p.add_argument("--period")
    p.set_defaults(func=cmd_features)

    p = add("ratings")
    p.add_argument("args", nargs="*")
    p.add_argument("--app")
    _add_market_flags(p, platform=False)
    p.add_argument("--period")
    p.set_defaults(func=cmd_ratings)

    parser.command_parsers = sub.choices
    return parser


def parse_command(argv, parser=None):
    """Parse `<command> [args...]`. Options may appear anywhere after the command."""
    parser = parser or build_parser()
    command, rest = argv[0], argv[1:]
    command_parser = parser.command_parsers.get(command)
    if command_parser is None:
        raise CliError(f"[ERROR] Unknown command: {command}")
    tail = []
    if "--" in rest:
        split = rest.index("--")
        rest, tail = rest[:split], rest[split + 1 :]
    ns = command_parser.parse_intermixed_args(rest)
    if tail:
        if not hasattr(ns, "args"):
            raise CliError(f"[ERROR] unrecognized arguments: {' '.join(tail)}")
        ns.args = list(ns.args or []) + tail
    ns.command = command
    return ns


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------


def _retry_after_seconds(payload):
    if not isinstance(payload, dict):
        return None
    try:
        seconds = float(payload.get("retryAfterSeconds"))
    except (TypeError, ValueError):
        return None
    if not math.isfinite(seconds) or seconds <= 0:
        return None
    return math.ceil(seconds)


def _describe_api_error(err):
    """Map an ApiError to the user-facing lines printed on stderr."""
    message = str(err)
    payload = err.payload if isinstance(err.payload, dict) else {}
    if err.status == 401:
        return ["Authentication failed. Run `asosuite login` again."]
    if err.status == 402:
        lines = [message or "Subscription required."]
        subscribe_url = payload.get("subscribeUrl")
        if isinstance(subscribe_url, str) and subscribe_url.strip():
            lines.append(f"Subscribe: {subscribe_url}")
        return lines
    if err.status == 429:
        lines = [message or "Rate limit exceeded."]
        retry_after = _retry_after_seconds(payload)
        if retry_after is not None:
            lines.append(f"Retry after: {retry_after}s")
        return lines
    if err.status == 404:
        return ["CLI endpoint not found on server.", f"Expected server URL: {config.API_BASE_URL}"]
    return [message or repr(err)]


def _error_type(err):
    if isinstance(err, ApiError):
        return {
            401: "auth_failed",
            402: "subscription_required",
            404: "endpoint_not_found",
            429: "rate_limited",
        }.get(err.status, "api_error")
    if isinstance(err, LoginError):
        return f"login_{err.state.value}"
    if isinstance(err, SetupError):
        return "setup_needed"
    return "error"


def _emit_cli_error(err, fmt):
    lines = _describe_api_error(err) if isinstance(err, ApiError) else [str(err)]
    if fmt == "json":
        error = {
            "type": _error_type(err),
            "message": "\n".join(lines),
            "exit_code": getattr(err, "exit_code", 1),
        }
        if isinstance(err, ApiError):
            error["status"] = err.status
        payload = {"ok": False, "schema_version": config.CONTRACT_SCHEMA_VERSION, "error": error}
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    for line in lines:
        print(line, file=sys.stderr)


def main(argv=None):
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    argv = sys.argv[1:] if argv is None else list(argv)
    fmt = "table"
    try:
        fmt, verbose, remaining_argv = _extract_global_flags(argv)
        if verbose:
            config.HTTP_LOG_ENABLED = True

        if not remaining_argv or remaining_argv[0] in ("help", "--help", "-h"):
            print(HELP_TEXT)
            return
        options = remaining_argv
        if "--" in options:
            options = options[: options.index("--")]
        if any(arg in ("--help", "-h") for arg in options):
            print(HELP_TEXT)
            return

        ns = parse_command(remaining_argv)
        ns.format = fmt

        # The credential is read once and handed to the command explicitly.
        client = AsoSuiteClient(access_token=config.get_access_token(config.load_config()))
        ns.func(ns, client)

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(str(e) or repr(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
