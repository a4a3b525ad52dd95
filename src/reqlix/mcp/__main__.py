"""Serve the reqlix MCP tools on stdio from the current directory.

Same as ``reqlix serve``; configuration is discovered from the working
directory upwards.
"""

import sys

from reqlix.mcp import MCP_AVAILABLE, MISSING_MCP_MESSAGE, run_server

if __name__ == "__main__":
    if not MCP_AVAILABLE:
        print(f"Error: {MISSING_MCP_MESSAGE}", file=sys.stderr)
        sys.exit(1)
    run_server()
