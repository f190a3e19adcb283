"""Unit tests for report export."""

from __future__ import annotations

import json

import pytest
import yaml

from buildstats.stats.export import ReportFormat, dump_report
from buildstats.stats.stats import Stats

pytestmark = pytest.mark.unit


class TestDumpReport:
    """Tests for dump_report."""

    def test_json(self, dynamic_stats: Stats) -> None:
        """Test that JSON output parses back to the report."""
        report = dynamic_stats.to_json({"all": False, "assets": True, "chunkGroups": True})
        text = dump_report(report)
        assert text.endswith("\n")
        assert json.loads(text) == report

    def test_yaml_keeps_order(self, dynamic_stats: Stats) -> None:
        """Test that YAML output keeps report key order."""
        report = dynamic_stats.to_json({"all": False, "chunkGroups": True, "assets": True})
        text = dump_report(report, ReportFormat.YAML)
        assert yaml.safe_load(text) == report
        assert text.index("assets:") < text.index("namedChunkGroups:")

    def test_string_format(self) -> None:
        """Test that formats are accepted by name."""
        assert dump_report({"hash": "x"}, "yaml") == "hash: x\n"

    def test_empty_report(self) -> None:
        """Test that an empty report serializes to an empty object."""
        assert dump_report({}) == "{}\n"

    def test_unknown_format(self) -> None:
        """Test that unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported report format"):
            dump_report({}, "xml")
