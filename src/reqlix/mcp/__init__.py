"""reqlix.mcp - MCP interface to a project's requirements directory.

``handlers`` and ``validation`` work without the MCP SDK and back both the
server and the CLI. The FastMCP server itself needs the optional extra
(``pip install reqlix[mcp]``); check ``MCP_AVAILABLE`` before calling
``create_server`` or ``run_server``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

try:
    from mcp.server.fastmcp import FastMCP

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    FastMCP = None

if TYPE_CHECKING:
    from reqlix.config.settings import Settings

MISSING_MCP_MESSAGE = "MCP dependencies not installed. Install with: pip install reqlix[mcp]"


def create_server(settings: Settings | None = None, working_dir: Path | None = None):
    """Build the FastMCP server with the reqlix_* tools registered.

    Raises:
        ImportError: If the mcp extra is not installed.
    """
    if not MCP_AVAILABLE:
        raise ImportError(MISSING_MCP_MESSAGE)
    from reqlix.mcp.server import create_server as _create

    return _create(settings=settings, working_dir=working_dir)


def run_server(
    working_dir: Path | None = None,
    transport: str = "stdio",
    settings: Settings | None = None,
) -> None:
    """Serve the reqlix_* tools until the transport closes.

    Raises:
        ImportError: If the mcp extra is not installed.
    """
    if not MCP_AVAILABLE:
        raise ImportError(MISSING_MCP_MESSAGE)
    from reqlix.mcp.server import run_server as _run

    _run(working_dir=working_dir, transport=transport, settings=settings)


__all__ = [
    "MCP_AVAILABLE",
    "create_server",
    "run_server",
]
