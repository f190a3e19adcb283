"""Assemble a report from build facts and resolved options."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from buildstats.stats.facts import AssetFact, BuildFacts
from buildstats.stats.match import NameFilter
from buildstats.stats.options import DISPLAY_FIELDS, ResolvedOptions
from buildstats.stats.views import AssetView

logger = logging.getLogger(__name__)

_ASSET_SORT_KEYS: dict[str, Callable[[AssetView], Any]] = {
    "name": lambda a: a.name,
    "size": lambda a: a.size,
    "emitted": lambda a: a.emitted,
    "comparedForEmit": lambda a: a.compared_for_emit,
    "chunkNames": lambda a: a.chunk_names,
}

# Option name -> report key for values copied straight from ``BuildFacts.meta``.
_META_FIELDS: dict[str, str] = {
    "hash": "hash",
    "version": "version",
    "timings": "time",
    "builtAt": "builtAt",
    "publicPath": "publicPath",
    "outputPath": "outputPath",
}


def build_report(facts: BuildFacts, resolved: ResolvedOptions) -> dict[str, Any]:
    """Build the structured report.

    A report key is present if and only if its option resolved to true;
    keys follow the option declaration order.

    Parameters
    ----------
    facts
        Facts extracted from the build.
    resolved
        Resolved options.

    Returns
    -------
    dict[str, Any]
        JSON-serializable report.
    """
    assets = select_assets(facts.assets, sort=resolved.assets_sort, exclude=resolved.exclude_assets)
    module_filter = NameFilter.from_patterns(resolved.exclude_modules)
    modules = [m for m in facts.modules if not module_filter.excludes(m.name)]

    report: dict[str, Any] = {}
    for option in DISPLAY_FIELDS:
        if not resolved.enabled(option):
            continue
        if option == "env":
            report["environment"] = resolved.env_payload
        elif option in _META_FIELDS:
            report[_META_FIELDS[option]] = facts.meta.get(_META_FIELDS[option])
        elif option == "assets":
            report["assets"] = [a.model_dump(by_alias=True) for a in assets]
        elif option == "assetsByChunkName":
            report["assetsByChunkName"] = assets_by_chunk_name((a.name, a.chunk_names) for a in assets)
        elif option == "filteredAssets":
            report["filteredAssets"] = facts.total_assets - len(assets)
        elif option == "chunks":
            report["chunks"] = [c.model_dump(by_alias=True) for c in facts.chunks]
        elif option == "modules":
            report["modules"] = [m.model_dump(by_alias=True) for m in modules]
        elif option == "filteredModules":
            report["filteredModules"] = facts.total_modules - len(modules)
        elif option == "entrypoints":
            report["entrypoints"] = {
                g.name: g.view.model_dump(by_alias=True) for g in facts.named_groups if g.entrypoint
            }
        elif option == "chunkGroups":
            report["namedChunkGroups"] = {g.name: g.view.model_dump(by_alias=True) for g in facts.named_groups}
        elif option == "errors":
            report["errors"] = [dict(e) for e in facts.errors]
        elif option == "errorsCount":
            report["errorsCount"] = len(facts.errors)
        elif option == "warnings":
            report["warnings"] = [dict(w) for w in facts.warnings]
        elif option == "warningsCount":
            report["warningsCount"] = len(facts.warnings)
    return report


def select_assets(facts: list[AssetFact], *, sort: str, exclude: tuple[str, ...] = ()) -> list[AssetView]:
    """Sort and filter asset facts for display.

    Parameters
    ----------
    facts
        Asset facts in name order.
    sort
        Asset field to sort by; a '!' prefix sorts descending. Ties keep
        emission order. Unknown fields keep name order.
    exclude
        Glob patterns of asset names to hide.

    Returns
    -------
    list[AssetView]
        Retained asset views in display order.
    """
    descending = sort.startswith("!")
    field = sort.lstrip("!")
    key = _ASSET_SORT_KEYS.get(field)
    if key is None:
        logger.debug("Unknown assetsSort field %r, keeping name order", field)
        ordered = list(facts)
    else:
        by_emission = sorted(facts, key=lambda f: f.order)
        ordered = sorted(by_emission, key=lambda f: key(f.view), reverse=descending)

    excluder = NameFilter.from_patterns(exclude)
    return [f.view for f in ordered if not excluder.excludes(f.view.name)]


def assets_by_chunk_name(assets: Iterable[tuple[str, Iterable[str]]]) -> dict[str, list[str]]:
    """Group asset names by chunk name.

    Parameters
    ----------
    assets
        ``(asset name, chunk names)`` pairs in display order.

    Returns
    -------
    dict[str, list[str]]
        Chunk name to asset names, both in order of first appearance.
    """
    index: dict[str, list[str]] = {}
    for name, chunk_names in assets:
        for chunk_name in chunk_names:
            names = index.setdefault(chunk_name, [])
            if name not in names:
                names.append(name)
    return index


def assets_by_chunk_name_from_report(assets: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """Rebuild ``assetsByChunkName`` from serialized ``assets`` entries."""
    return assets_by_chunk_name((a["name"], a.get("chunkNames", [])) for a in assets)
