"""Tests for reqlix.mcp.responses."""

import json

from reqlix.core.models import RequirementSummary
from reqlix.mcp.responses import SERIALIZATION_FAILURE, json_error, json_success


class TestEnvelopes:
    def test_success(self):
        assert json.loads(json_success({"a": 1})) == {"success": True, "data": {"a": 1}}

    def test_error(self):
        assert json.loads(json_error("boom")) == {"success": False, "error": "boom"}

    def test_pretty_printed(self):
        assert json_success([]) == '{\n  "success": true,\n  "data": []\n}'

    def test_records_serialized(self):
        result = json.loads(json_success(RequirementSummary("G.G.1", "Title")))
        assert result["data"] == {"index": "G.G.1", "title": "Title"}

    def test_non_ascii_kept(self):
        assert "héllo" in json_success("héllo")

    def test_unserializable_data(self):
        assert json_success(object()) == SERIALIZATION_FAILURE
        assert json.loads(SERIALIZATION_FAILURE) == {
            "success": False,
            "error": "Failed to serialize response",
        }
