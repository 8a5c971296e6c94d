"""Run the ASO Suite MCP server in streamable-http mode."""

import os

from asosuite_cli.mcp_server import mcp

if __name__ == "__main__":
    mcp.settings.host = os.environ.get("ASOSUITE_MCP_HTTP_HOST", "127.0.0.1")
    mcp.settings.port = int(os.environ.get("ASOSUITE_MCP_HTTP_PORT", "8808"))
    mcp.run(transport="streamable-http")
