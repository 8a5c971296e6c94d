"""MCP server exposing AsoSuiteClient methods as tools.

Package structure:
  __init__.py       — FastMCP init, register() calls, re-exports
  __main__.py       — ``python -m asosuite_cli.mcp_server`` entry point
  _core.py          — Client caching, _call dispatcher, response contract, input checks
  _tools_read.py    — 10 account/app/keyword/market query tools
  _tools_write.py   — 10 tracking, keyword, related-app and event mutation tools

Run: python -m asosuite_cli.mcp_server
Requires: pip install .[mcp]
Authenticate first with `asosuite login`; the server reads the same credential file.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from asosuite_cli.mcp_server import _tools_read, _tools_write

mcp = FastMCP(
    "asosuite",
    instructions=(
        "ASO Suite App Store optimization tools. "
        "Apps accept a numeric id, an id-prefixed value (id1606429298) or an App Store URL. "
        "Regions are two-letter country codes (default US); platform defaults to iphone. "
        "keyword_metrics takes at most 50 keywords, tracked keyword add/remove at most 200. "
        "Null metrics mean the server is still computing them; retry later.\n"
        "Errors come back as {ok: false, error, error_detail}. "
        "type 'setup' means the user must run `asosuite login`."
    ),
)

for _mod in [_tools_read, _tools_write]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

# _core
from asosuite_cli.mcp_server._core import (  # noqa: E402, F401
    _ALLOWED_METHODS,
    _call,
    _contract_error,
    _ensure_contract_dict,
    _finalize_tool_result,
    _get_client,
    _validate_text,
)

# _tools_read
from asosuite_cli.mcp_server._tools_read import (  # noqa: E402, F401
    get_charts,
    get_features,
    get_ratings,
    get_subscription,
    keyword_metrics,
    list_apps,
    list_events,
    list_related_apps,
    list_tracked_keywords,
    search_apps,
)

# _tools_write
from asosuite_cli.mcp_server._tools_write import (  # noqa: E402, F401
    add_event,
    add_related_app,
    add_tracked_keywords,
    delete_event,
    plan_app,
    remove_related_app,
    remove_tracked_keywords,
    track_app,
    unplan_app,
    untrack_app,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
