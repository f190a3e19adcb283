"""Unit tests for text rendering."""

from __future__ import annotations

import pytest

from buildstats.core.types import BuildResult
from buildstats.stats.render import render_report, to_json_text
from buildstats.stats.sizes import format_size
from buildstats.stats.stats import Stats

pytestmark = pytest.mark.unit


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 bytes"),
            (-5, "0 bytes"),
            (198, "198 bytes"),
            (1023, "1020 bytes"),
            (1024, "1 KiB"),
            (1940, "1.89 KiB"),
            (5 * 1024 * 1024, "5 MiB"),
            (float("nan"), "0 bytes"),
        ],
    )
    def test_format(self, size: float, expected: str) -> None:
        """Test three significant digits with binary units."""
        assert format_size(size) == expected


class TestRenderReport:
    """Tests for render_report."""

    def test_empty(self) -> None:
        """Test that an empty report renders nothing."""
        assert render_report({}) == ""

    def test_none_environment_renders_nothing(self) -> None:
        """Test that a missing env payload prints no header."""
        assert render_report({"environment": None}) == ""

    def test_environment_string_is_quoted(self) -> None:
        """Test the quoted string form."""
        assert render_report({"environment": "production"}) == 'Environment (--env): "production"'

    def test_environment_array(self) -> None:
        """Test one array element per line."""
        assert render_report({"environment": [1, "x"]}) == 'Environment (--env): [\n  1,\n  "x"\n]'

    def test_scalar_sections(self) -> None:
        """Test labelled scalar lines."""
        text = render_report(
            {"hash": "abc", "version": "5.0.0", "time": 42, "builtAt": 0, "publicPath": "/", "outputPath": "/dist"}
        )
        assert text.splitlines() == [
            "Hash: abc",
            "Version: 5.0.0",
            "Time: 42ms",
            "Built at: 1970-01-01 00:00:00",
            "PublicPath: /",
            "Output path: /dist",
        ]

    def test_asset_table(self) -> None:
        """Test asset table alignment and hidden count."""
        report = {
            "assets": [
                {"name": "main.js", "size": 1940, "emitted": True, "chunkNames": ["main"]},
                {"name": "lazy.chunk.js", "size": 111, "comparedForEmit": True, "chunkNames": []},
            ],
            "filteredAssets": 2,
        }
        assert render_report(report).splitlines() == [
            "        Asset       Size" + " " * 23 + "Chunk Names",
            "      main.js   1.89 KiB  [emitted]" + " " * 12 + "main",
            "lazy.chunk.js  111 bytes  [compared for emit]",
            " + 2 hidden assets",
        ]

    def test_index_only_without_assets(self) -> None:
        """Test that the chunk name index prints only without the asset table."""
        report = {"assetsByChunkName": {"main": ["main.js", "main.css"]}}
        assert render_report(report) == "Assets by chunk name:\n  main: main.js, main.css"
        assert render_report({"assets": [], **report}) == ""

    def test_chunk_groups(self) -> None:
        """Test entrypoint and chunk group lines without repeating entrypoints."""
        group = {"assets": ["main.js"], "auxiliaryAssets": ["main.js.map"], "childAssets": {"prefetch": ["lazy.js"]}}
        lazy = {"assets": ["lazy.js"], "auxiliaryAssets": [], "childAssets": {}}
        report = {"entrypoints": {"main": group}, "namedChunkGroups": {"main": group, "lazy": lazy}}
        assert render_report(report).splitlines() == [
            "Entrypoint main = main.js (auxiliary: main.js.map)",
            "  prefetch: lazy.js",
            "Chunk Group lazy = lazy.js",
        ]

    def test_chunks_and_modules(self) -> None:
        """Test chunk and module lines."""
        report = {
            "chunks": [{"id": 938, "names": ["entryA"], "files": ["entryA.js"], "size": 24, "entry": True}],
            "modules": [{"id": 0, "name": "./a.js", "size": 24, "chunks": [938]}],
        }
        assert render_report(report).splitlines() == [
            "chunk {938} entryA.js (entryA) 24 bytes [entry]",
            "[0] ./a.js 24 bytes {938}",
        ]

    def test_problems(self) -> None:
        """Test error and warning blocks with counts."""
        report = {
            "errors": [{"message": "boom", "moduleName": "./a.js", "loc": "1:2"}],
            "errorsCount": 1,
            "warnings": [{"message": "careful"}],
            "warningsCount": 3,
        }
        assert render_report(report).splitlines() == [
            "ERROR in ./a.js 1:2",
            "boom",
            "1 error",
            "WARNING",
            "careful",
            "3 warnings",
        ]

    def test_unknown_key_falls_back(self) -> None:
        """Test that unknown keys render as generic lines."""
        assert render_report({"logging": {"a": 1}}) == 'logging: {\n  "a": 1\n}'

    def test_malformed_section_falls_back(self) -> None:
        """Test that unexpected shapes degrade instead of raising."""
        assert render_report({"assets": ["not-a-mapping"]}) == 'assets: [\n  "not-a-mapping"\n]'
        assert render_report({"builtAt": "yesterday"}) == 'builtAt: "yesterday"'
        assert render_report({"chunks": 5}) == "chunks: 5"

    def test_unencodable_values(self) -> None:
        """Test that values JSON cannot encode never raise."""
        cyclic: list = []
        cyclic.append(cyclic)
        assert to_json_text({1, 2}).startswith('"{')
        assert to_json_text(cyclic) == "[[...]]"

    def test_deeply_nested_environment(self) -> None:
        """Test that a payload nested past the recursion limit still renders."""
        payload: list = []
        for _ in range(3000):
            payload = [payload]
        text = Stats(BuildResult()).to_string({"all": False, "env": True, "_env": payload})
        assert text.startswith("Environment (--env): [[")
        assert "\n" not in text
        assert to_json_text(payload).startswith("[[")

    def test_deterministic(self, dynamic_stats: Stats) -> None:
        """Test that equal reports render identically."""
        assert render_report(dynamic_stats.to_json()) == render_report(dynamic_stats.to_json())
