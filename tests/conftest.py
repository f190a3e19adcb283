"""Shared test fixtures for buildstats tests."""

from __future__ import annotations

from typing import Any

import pytest

from buildstats.core.types import BuildResult
from buildstats.stats.stats import Stats


def _entry_chunk(chunk_id: int, name: str, module_ids: list[int]) -> dict[str, Any]:
    return {
        "id": chunk_id,
        "name": name,
        "files": [f"{name}.js"],
        "modules": module_ids,
        "entry": True,
        "initial": True,
    }


@pytest.fixture
def two_entries_data() -> dict[str, Any]:
    """Raw data of a build with two independent entries."""
    return {
        "hash": "4f0c2a1d",
        "version": "5.0.0",
        "time": 42,
        "builtAt": 1_600_000_000_000,
        "publicPath": "auto",
        "outputPath": "/dist",
        "modules": [
            {"id": 0, "name": "./fixtures/a.js", "size": 24},
            {"id": 1, "name": "./fixtures/b.js", "size": 30},
        ],
        "chunks": [_entry_chunk(938, "entryA", [0]), _entry_chunk(513, "entryB", [1])],
        "chunkGroups": [
            {"id": "entryA", "name": "entryA", "chunks": [938], "entrypoint": True},
            {"id": "entryB", "name": "entryB", "chunks": [513], "entrypoint": True},
        ],
        "assets": [
            {"name": "entryA.js", "size": 198, "emitted": True},
            {"name": "entryB.js", "size": 1940, "emitted": True},
        ],
    }


@pytest.fixture
def two_entries_build(two_entries_data: dict[str, Any]) -> BuildResult:
    """A build with two independent entries and no shared or dynamic chunks."""
    return BuildResult.model_validate(two_entries_data)


@pytest.fixture
def dynamic_build() -> BuildResult:
    """A build where entryB dynamically imports chunkB."""
    return BuildResult.model_validate(
        {
            "modules": [
                {"id": 0, "name": "./fixtures/a.js", "size": 24},
                {"id": 1, "name": "./fixtures/chunk-b.js", "size": 56},
                {"id": 2, "name": "./fixtures/b.js", "size": 30},
            ],
            "chunks": [
                _entry_chunk(938, "entryA", [0]),
                _entry_chunk(513, "entryB", [1]),
                {"id": 336, "name": "chunkB", "files": ["chunkB.js"], "modules": [2]},
            ],
            "chunkGroups": [
                {"id": "entryA", "name": "entryA", "chunks": [938], "entrypoint": True},
                {
                    "id": "entryB",
                    "name": "entryB",
                    "chunks": [513],
                    "entrypoint": True,
                    "children": [{"group": "chunkB"}],
                },
                {"id": "chunkB", "name": "chunkB", "chunks": [336]},
            ],
            "assets": [
                {"name": "entryA.js", "size": 198, "emitted": True},
                {"name": "entryB.js", "size": 1940, "emitted": True},
                {"name": "chunkB.js", "size": 111, "emitted": True},
            ],
        }
    )


@pytest.fixture
def prefetch_build() -> BuildResult:
    """A build with prefetch/preload relations, a source map and a group cycle."""
    return BuildResult.model_validate(
        {
            "chunks": [
                {
                    "id": "main",
                    "name": "main",
                    "files": ["main.js"],
                    "auxiliaryFiles": ["main.js.map"],
                    "entry": True,
                    "initial": True,
                },
                {"id": 10, "name": "lazy", "files": ["lazy.js"], "idHints": ["vendors"]},
                {"id": 11, "files": ["11.js"]},
            ],
            "chunkGroups": [
                {
                    "id": "main",
                    "name": "main",
                    "chunks": ["main", 404],
                    "entrypoint": True,
                    "children": [
                        {"group": "lazy", "relation": "prefetch"},
                        {"group": "anon", "relation": "preload"},
                        {"group": "missing", "relation": "prefetch"},
                        {"group": "lazy", "relation": "teleport"},
                    ],
                },
                {
                    "id": "lazy",
                    "name": "lazy",
                    "chunks": [10],
                    "children": [{"group": "main", "relation": "prefetch"}],
                },
                {"id": "anon", "chunks": [11]},
            ],
            "assets": [
                {"name": "main.js", "size": 2048, "emitted": True},
                {"name": "main.js.map", "size": 4096, "emitted": True, "info": {"development": True}},
                {"name": "lazy.js", "size": 512, "comparedForEmit": True},
                {"name": "11.js", "size": 512, "emitted": True},
            ],
        }
    )


@pytest.fixture
def dynamic_stats(dynamic_build: BuildResult) -> Stats:
    """Stats over the dynamic import build."""
    return Stats(dynamic_build)
