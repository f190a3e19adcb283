"""Read-only model of a finished build.

These models describe what the build pipeline hands to the reporting core.
Field names accept both the camelCase spelling bundlers emit and the
snake_case attribute names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

ModuleId = int | str
ChunkId = int | str

_MODEL_CONFIG = {"frozen": True, "extra": "forbid", "alias_generator": to_camel, "populate_by_name": True}


class Module(BaseModel):
    """A module that took part in the build.

    Attributes
    ----------
    id
        Module id as assigned by the build.
    name
        Human-readable identifier (usually a request path).
    size
        Module size in bytes.
    """

    id: ModuleId
    name: str
    size: int = Field(default=0, ge=0)

    model_config = _MODEL_CONFIG


class Chunk(BaseModel):
    """A unit of bundled output.

    Attributes
    ----------
    id
        Chunk id, stable for the lifetime of the build result.
    name
        Chunk name, or None for anonymous chunks.
    id_hints
        Hints that explain how the id was chosen (e.g. split chunk cache groups).
    files
        Output files rendered from this chunk.
    auxiliary_files
        Secondary files associated with the chunk (source maps, etc.).
    modules
        Ids of the modules contained in the chunk.
    entry
        True if the chunk carries the runtime of an entrypoint.
    initial
        True if the chunk is loaded on initial page load.
    rendered
        True if the chunk was (re)rendered by this build.
    """

    id: ChunkId
    name: str | None = None
    id_hints: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)
    auxiliary_files: list[str] = Field(default_factory=list)
    modules: list[ModuleId] = Field(default_factory=list)
    entry: bool = False
    initial: bool = False
    rendered: bool = True

    model_config = _MODEL_CONFIG


class ChunkGroupChild(BaseModel):
    """Edge from a chunk group to one of its child groups.

    Attributes
    ----------
    group
        Id of the child chunk group.
    relation
        Ordered relation type ('prefetch', 'preload'), or None for a plain
        async child.
    """

    group: str
    relation: str | None = None

    model_config = _MODEL_CONFIG


class ChunkGroup(BaseModel):
    """An entrypoint or a dynamically reachable split point."""

    id: str
    name: str | None = None
    chunks: list[ChunkId] = Field(default_factory=list)
    entrypoint: bool = False
    children: list[ChunkGroupChild] = Field(default_factory=list)

    model_config = _MODEL_CONFIG


class Asset(BaseModel):
    """An emitted output file.

    Attributes
    ----------
    name
        Output file name relative to the output path.
    size
        Size in bytes.
    emitted
        True if the file was written by this build.
    compared_for_emit
        True if emitting was skipped after comparing with the existing file.
    info
        Free-form metadata attached by the build (e.g. 'minimized', 'development').
    """

    name: str
    size: int = Field(default=0, ge=0)
    emitted: bool = False
    compared_for_emit: bool = False
    info: dict[str, Any] = Field(default_factory=dict)

    model_config = _MODEL_CONFIG


class BuildProblem(BaseModel):
    """An error or warning reported by the build."""

    message: str
    module_name: str | None = None
    loc: str | None = None

    model_config = _MODEL_CONFIG


class BuildResult(BaseModel):
    """A completed build, treated as frozen while reports are produced.

    Attributes
    ----------
    modules
        All modules of the build.
    chunks
        All chunks in build order.
    chunk_groups
        Chunk groups in registration order.
    assets
        Emitted assets in emission order.
    env_context
        Environment payload the build was started with (any JSON value).
    hash
        Build hash.
    version
        Version of the bundler that produced the build.
    time
        Build duration in milliseconds.
    built_at
        Build completion time in milliseconds since the epoch.
    public_path
        Public URL prefix of the output.
    output_path
        Absolute output directory.
    errors
        Errors reported by the build.
    warnings
        Warnings reported by the build.
    """

    modules: list[Module] = Field(default_factory=list)
    chunks: list[Chunk] = Field(default_factory=list)
    chunk_groups: list[ChunkGroup] = Field(default_factory=list)
    assets: list[Asset] = Field(default_factory=list)
    env_context: Any = None
    hash: str | None = None
    version: str | None = None
    time: int | None = None
    built_at: int | None = None
    public_path: str | None = None
    output_path: str | None = None
    errors: list[BuildProblem] = Field(default_factory=list)
    warnings: list[BuildProblem] = Field(default_factory=list)

    model_config = _MODEL_CONFIG
