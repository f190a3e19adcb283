"""Report view models.

Views serialize with camelCase keys (``model_dump(by_alias=True)``) in
field declaration order.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from buildstats.core.types import ChunkId, ModuleId

_VIEW_CONFIG = {"frozen": True, "extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class AssetView(BaseModel):
    """An emitted asset with the chunks that reference it.

    Attributes
    ----------
    name
        Asset file name.
    size
        Size in bytes.
    emitted
        True if written by this build.
    compared_for_emit
        True if emitting was skipped after comparison.
    chunk_names
        Names of chunks producing the asset, in chunk visiting order.
    chunk_id_hints
        Sorted id hints of those chunks.
    auxiliary_chunk_names
        Names of chunks referencing the asset as an auxiliary file.
    auxiliary_chunk_id_hints
        Sorted id hints of those chunks.
    info
        Asset metadata; always includes ``size``.
    """

    name: str
    size: int
    emitted: bool
    compared_for_emit: bool
    chunk_names: list[str] = Field(default_factory=list)
    chunk_id_hints: list[str] = Field(default_factory=list)
    auxiliary_chunk_names: list[str] = Field(default_factory=list)
    auxiliary_chunk_id_hints: list[str] = Field(default_factory=list)
    info: dict[str, Any] = Field(default_factory=dict)

    model_config = _VIEW_CONFIG


class ChildGroupView(BaseModel):
    """A prefetched or preloaded child group, listed without its own children."""

    name: str | None
    chunks: list[ChunkId] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)
    auxiliary_assets: list[str] = Field(default_factory=list)

    model_config = _VIEW_CONFIG


class ChunkGroupView(BaseModel):
    """A chunk group with its assets and ordered child groups."""

    name: str | None
    chunks: list[ChunkId] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)
    auxiliary_assets: list[str] = Field(default_factory=list)
    children: dict[str, list[ChildGroupView]] = Field(default_factory=dict)
    child_assets: dict[str, list[str]] = Field(default_factory=dict)

    model_config = _VIEW_CONFIG


class ChunkView(BaseModel):
    """A chunk with its files and contained module ids."""

    id: ChunkId
    names: list[str] = Field(default_factory=list)
    id_hints: list[str] = Field(default_factory=list)
    entry: bool = False
    initial: bool = False
    rendered: bool = True
    size: int = 0
    files: list[str] = Field(default_factory=list)
    auxiliary_files: list[str] = Field(default_factory=list)
    modules: list[ModuleId] = Field(default_factory=list)

    model_config = _VIEW_CONFIG


class ModuleView(BaseModel):
    """A module with the ids of the chunks containing it."""

    id: ModuleId
    name: str
    size: int = 0
    chunks: list[ChunkId] = Field(default_factory=list)

    model_config = _VIEW_CONFIG
