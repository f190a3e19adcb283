"""Option-independent facts extracted from a build result.

Everything here is a pure function of the ``BuildResult``; the returned
``BuildFacts`` can be cached per build and shared between report requests.
Dangling references (a group naming a missing chunk, a chunk naming a
missing module) are dropped from the derived views.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from buildstats.core.types import Asset, BuildProblem, BuildResult, Chunk, ChunkGroup, ChunkId
from buildstats.stats.views import AssetView, ChildGroupView, ChunkGroupView, ChunkView, ModuleView

logger = logging.getLogger(__name__)

# Ordered child relations listed under a group's ``children``. Plain async
# children (relation None) are reachable through their own named group.
CHILD_RELATIONS: tuple[str, ...] = ("preload", "prefetch")


@dataclass(frozen=True)
class AssetFact:
    """An asset view together with its emission order.

    Attributes
    ----------
    order
        Index of the asset's first occurrence in the build's asset list.
    view
        Asset view.
    """

    order: int
    view: AssetView


@dataclass(frozen=True)
class NamedGroupFact:
    """A named chunk group in registration order."""

    name: str
    entrypoint: bool
    view: ChunkGroupView


@dataclass(frozen=True)
class BuildFacts:
    """Summaries of a build result shared by every report.

    Attributes
    ----------
    assets
        Deduplicated assets sorted by name.
    total_assets
        Number of assets after deduplication.
    named_groups
        Named chunk groups in registration order.
    chunks
        Chunk views in build order.
    modules
        Module views in build order.
    errors
        Serialized build errors.
    warnings
        Serialized build warnings.
    meta
        Scalar build values keyed by report field name.
    """

    assets: list[AssetFact]
    total_assets: int
    named_groups: list[NamedGroupFact]
    chunks: list[ChunkView]
    modules: list[ModuleView]
    errors: list[dict[str, Any]]
    warnings: list[dict[str, Any]]
    meta: dict[str, Any]

    @property
    def total_modules(self) -> int:
        return len(self.modules)


def extract_facts(build: BuildResult) -> BuildFacts:
    """Extract report facts from a finished build.

    Parameters
    ----------
    build
        Build result; never modified.

    Returns
    -------
    BuildFacts
        Option-independent facts.
    """
    chunks_by_id = _index_chunks(build.chunks)
    assets = extract_assets(build)
    return BuildFacts(
        assets=assets,
        total_assets=len(assets),
        named_groups=extract_named_groups(build, chunks_by_id),
        chunks=extract_chunks(build),
        modules=extract_modules(build),
        errors=[_problem(p) for p in build.errors],
        warnings=[_problem(p) for p in build.warnings],
        meta={
            "hash": build.hash,
            "version": build.version,
            "time": build.time,
            "builtAt": build.built_at,
            "publicPath": build.public_path,
            "outputPath": build.output_path,
        },
    )


def extract_assets(build: BuildResult) -> list[AssetFact]:
    """Build asset facts with chunk names reverse-mapped from chunk files.

    Assets are deduplicated by name (first occurrence wins) and sorted by
    name. Each fact keeps its emission index for re-sorting by other fields.
    """
    first: dict[str, tuple[int, Asset]] = {}
    for asset in build.assets:
        if asset.name not in first:
            first[asset.name] = (len(first), asset)

    names: dict[str, dict[str, list[str]]] = {n: {"chunk": [], "aux": []} for n in first}
    hints: dict[str, dict[str, set[str]]] = {n: {"chunk": set(), "aux": set()} for n in first}
    for chunk in build.chunks:
        for kind, files in (("chunk", chunk.files), ("aux", chunk.auxiliary_files)):
            for file in files:
                if file not in first:
                    logger.debug("Chunk %r references unknown asset %r", chunk.id, file)
                    continue
                if chunk.name is not None and chunk.name not in names[file][kind]:
                    names[file][kind].append(chunk.name)
                hints[file][kind].update(chunk.id_hints)

    facts: list[AssetFact] = []
    for name, (order, asset) in first.items():
        info = dict(asset.info)
        info.setdefault("size", asset.size)
        view = AssetView(
            name=name,
            size=asset.size,
            emitted=asset.emitted,
            compared_for_emit=asset.compared_for_emit,
            chunk_names=names[name]["chunk"],
            chunk_id_hints=sorted(hints[name]["chunk"]),
            auxiliary_chunk_names=names[name]["aux"],
            auxiliary_chunk_id_hints=sorted(hints[name]["aux"]),
            info=info,
        )
        facts.append(AssetFact(order=order, view=view))
    facts.sort(key=lambda f: f.view.name)
    return facts


def extract_named_groups(build: BuildResult, chunks_by_id: dict[ChunkId, Chunk]) -> list[NamedGroupFact]:
    """Build views for every named chunk group, in registration order."""
    groups_by_id: dict[str, ChunkGroup] = {}
    for group in build.chunk_groups:
        groups_by_id.setdefault(group.id, group)

    facts: list[NamedGroupFact] = []
    seen_names: set[str] = set()
    for group in build.chunk_groups:
        if group.name is None or group.name in seen_names:
            continue
        seen_names.add(group.name)
        view = _group_view(group, groups_by_id, chunks_by_id)
        facts.append(NamedGroupFact(name=group.name, entrypoint=group.entrypoint, view=view))
    return facts


def _group_view(
    group: ChunkGroup,
    groups_by_id: dict[str, ChunkGroup],
    chunks_by_id: dict[ChunkId, Chunk],
) -> ChunkGroupView:
    chunks = _group_chunks(group, chunks_by_id)

    # Children are listed one level deep.
    children: dict[str, list[ChildGroupView]] = {}
    child_assets: dict[str, dict[str, None]] = {}
    for edge in group.children:
        if edge.relation is None:
            continue
        if edge.relation not in CHILD_RELATIONS:
            logger.debug("Ignoring unknown chunk group relation %r on %r", edge.relation, group.id)
            continue
        target = groups_by_id.get(edge.group)
        if target is None:
            logger.debug("Chunk group %r references unknown child group %r", group.id, edge.group)
            continue
        target_chunks = _group_chunks(target, chunks_by_id)
        child = ChildGroupView(
            name=target.name,
            chunks=[c.id for c in target_chunks],
            assets=_unique(f for c in target_chunks for f in c.files),
            auxiliary_assets=_unique(f for c in target_chunks for f in c.auxiliary_files),
        )
        children.setdefault(edge.relation, []).append(child)
        child_assets.setdefault(edge.relation, {}).update(dict.fromkeys(child.assets))

    return ChunkGroupView(
        name=group.name,
        chunks=[c.id for c in chunks],
        assets=_unique(f for c in chunks for f in c.files),
        auxiliary_assets=_unique(f for c in chunks for f in c.auxiliary_files),
        children=children,
        child_assets={relation: list(names) for relation, names in child_assets.items()},
    )


def _group_chunks(group: ChunkGroup, chunks_by_id: dict[ChunkId, Chunk]) -> list[Chunk]:
    chunks: list[Chunk] = []
    for chunk_id in group.chunks:
        chunk = chunks_by_id.get(chunk_id)
        if chunk is None:
            logger.debug("Chunk group %r references unknown chunk %r", group.id, chunk_id)
            continue
        chunks.append(chunk)
    return chunks


def extract_chunks(build: BuildResult) -> list[ChunkView]:
    """Build chunk views in build order."""
    sizes = {m.id: m.size for m in build.modules}
    views: list[ChunkView] = []
    for chunk in build.chunks:
        module_ids = []
        for module_id in chunk.modules:
            if module_id not in sizes:
                logger.debug("Chunk %r references unknown module %r", chunk.id, module_id)
                continue
            module_ids.append(module_id)
        views.append(
            ChunkView(
                id=chunk.id,
                names=[chunk.name] if chunk.name is not None else [],
                id_hints=sorted(set(chunk.id_hints)),
                entry=chunk.entry,
                initial=chunk.initial,
                rendered=chunk.rendered,
                size=sum(sizes[m] for m in module_ids),
                files=list(chunk.files),
                auxiliary_files=list(chunk.auxiliary_files),
                modules=module_ids,
            )
        )
    return views


def extract_modules(build: BuildResult) -> list[ModuleView]:
    """Build module views with chunk membership derived from chunks."""
    membership: dict[Any, list[ChunkId]] = {m.id: [] for m in build.modules}
    for chunk in build.chunks:
        for module_id in chunk.modules:
            owners = membership.get(module_id)
            if owners is not None and chunk.id not in owners:
                owners.append(chunk.id)
    return [ModuleView(id=m.id, name=m.name, size=m.size, chunks=membership[m.id]) for m in build.modules]


def _index_chunks(chunks: list[Chunk]) -> dict[ChunkId, Chunk]:
    index: dict[ChunkId, Chunk] = {}
    for chunk in chunks:
        index.setdefault(chunk.id, chunk)
    return index


def _problem(problem: BuildProblem) -> dict[str, Any]:
    return problem.model_dump(by_alias=True, exclude_none=True)


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))
