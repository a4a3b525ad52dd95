"""Tests for the MCP server wiring in reqlix.mcp.server."""

import json
from unittest.mock import patch

import pytest

from reqlix.config.settings import Settings

TOOL_NAMES = {
    "reqlix_get_instructions",
    "reqlix_get_categories",
    "reqlix_get_chapters",
    "reqlix_get_requirements",
    "reqlix_get_requirement",
    "reqlix_search_requirements",
    "reqlix_get_version",
    "reqlix_insert_requirement",
    "reqlix_update_requirement",
    "reqlix_delete_requirement",
}


def _tools(server):
    return server._tool_manager._tools


class TestCreateServer:
    def test_registers_every_tool(self, tmp_path):
        pytest.importorskip("mcp")
        from reqlix.mcp.server import create_server

        server = create_server(settings=Settings(), working_dir=tmp_path)

        assert set(_tools(server)) == TOOL_NAMES

    def test_server_carries_instructions(self, tmp_path):
        pytest.importorskip("mcp")
        from reqlix.mcp.server import MCP_SERVER_INSTRUCTIONS, create_server

        server = create_server(settings=Settings(), working_dir=tmp_path)

        assert server.name == "reqlix"
        assert server._mcp_server.instructions == MCP_SERVER_INSTRUCTIONS

    def test_settings_discovered_from_working_dir(self, tmp_path):
        pytest.importorskip("mcp")
        from reqlix.mcp.server import create_server

        (tmp_path / ".reqlix.toml").write_text(
            '[requirements]\nrel_path = "custom"\n', encoding="utf-8"
        )
        server = create_server(working_dir=tmp_path)

        tool_fn = _tools(server)["reqlix_get_instructions"].fn
        result = json.loads(tool_fn(str(tmp_path), "Reading instructions"))

        assert result["success"] is True
        assert (tmp_path / "custom" / "AGENTS.md").is_file()


class TestToolWrappers:
    def test_get_requirement_tool(self, project_root, tmp_path):
        pytest.importorskip("mcp")
        from reqlix.mcp.server import create_server

        server = create_server(settings=Settings(), working_dir=tmp_path)
        tool_fn = _tools(server)["reqlix_get_requirement"].fn

        result = json.loads(tool_fn(project_root, "Reading G.G.1", "G.G.1"))

        assert result["data"]["title"] == "First"

    def test_update_tool_passes_keywords(self, tmp_path):
        pytest.importorskip("mcp")
        from reqlix.mcp.server import create_server

        settings = Settings()
        server = create_server(settings=settings, working_dir=tmp_path)
        tool_fn = _tools(server)["reqlix_update_requirement"].fn

        with patch("reqlix.mcp.server.handlers.handle_update_requirement") as mock_handler:
            mock_handler.return_value = '{"success": true, "data": []}'
            tool_fn("/project", "Batch update", items=[{"index": "G.G.1", "text": "x"}])

        mock_handler.assert_called_once_with(
            "/project",
            "Batch update",
            index=None,
            text=None,
            title=None,
            items=[{"index": "G.G.1", "text": "x"}],
            settings=settings,
        )

    def test_version_tool(self, tmp_path):
        pytest.importorskip("mcp")
        from reqlix import __version__
        from reqlix.mcp.server import create_server

        server = create_server(settings=Settings(), working_dir=tmp_path)
        result = json.loads(_tools(server)["reqlix_get_version"].fn())

        assert result == {"success": True, "data": {"version": __version__}}


class TestPackageEntryPoints:
    def test_create_server_forwards_settings(self, tmp_path):
        pytest.importorskip("mcp")
        import reqlix.mcp

        server = reqlix.mcp.create_server(settings=Settings(), working_dir=tmp_path)

        assert set(_tools(server)) == TOOL_NAMES

    def test_create_server_without_mcp(self, monkeypatch):
        import reqlix.mcp

        monkeypatch.setattr(reqlix.mcp, "MCP_AVAILABLE", False)
        with pytest.raises(ImportError, match=r"pip install reqlix\[mcp\]"):
            reqlix.mcp.create_server(settings=Settings())

    def test_run_server_without_mcp(self, monkeypatch):
        import reqlix.mcp

        monkeypatch.setattr(reqlix.mcp, "MCP_AVAILABLE", False)
        with pytest.raises(ImportError, match=r"pip install reqlix\[mcp\]"):
            reqlix.mcp.run_server(transport="stdio")

    def test_run_server_forwards_arguments(self, tmp_path):
        pytest.importorskip("mcp")
        import reqlix.mcp

        settings = Settings()
        with patch("reqlix.mcp.server.run_server") as mock_run:
            reqlix.mcp.run_server(working_dir=tmp_path, transport="sse", settings=settings)

        mock_run.assert_called_once_with(working_dir=tmp_path, transport="sse", settings=settings)
