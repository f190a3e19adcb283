"""Plain-text rendering of stats reports.

The text is derived from the report alone, so equal reports always render
to the same string. A section whose value has an unexpected shape degrades
to a generic ``key: <json>`` line instead of failing the whole render.
"""

from __future__ import annotations

import json
import logging
import reprlib
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from buildstats.stats.sizes import format_size

logger = logging.getLogger(__name__)


def render_report(report: Mapping[str, Any]) -> str:
    """Render a report as terminal text.

    Parameters
    ----------
    report
        Report as returned by ``build_report``.

    Returns
    -------
    str
        Lines joined by newlines, without a trailing newline. An empty
        report renders to an empty string.
    """
    lines: list[str] = []
    for key, value in report.items():
        section = _SECTIONS.get(key)
        if section is None:
            lines.append(_generic_line(key, value))
            continue
        try:
            lines.extend(section(value, report))
        except (TypeError, ValueError, KeyError, AttributeError, OverflowError, OSError, RecursionError):
            logger.debug("Falling back to generic rendering for %r", key, exc_info=True)
            lines.append(_generic_line(key, value))
    return "\n".join(lines)


def to_json_text(value: Any) -> str:
    """Pretty-print a value as JSON with 2-space indentation.

    Values JSON cannot encode are stringified; this never raises. Values
    nested too deeply for ``repr`` are shortened with ``reprlib``.
    """
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return repr(value)
    except RecursionError:
        return reprlib.repr(value)


def _generic_line(key: str, value: Any) -> str:
    return f"{key}: {to_json_text(value)}"


def _environment(value: Any, report: Mapping[str, Any]) -> list[str]:
    if value is None:
        return []
    return [f"Environment (--env): {to_json_text(value)}"]


def _labelled(label: str, suffix: str = "") -> Callable[[Any, Mapping[str, Any]], list[str]]:
    def section(value: Any, report: Mapping[str, Any]) -> list[str]:
        if value is None:
            return []
        return [f"{label}: {value}{suffix}"]

    return section


def _built_at(value: Any, report: Mapping[str, Any]) -> list[str]:
    if value is None:
        return []
    when = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return [f"Built at: {when.strftime('%Y-%m-%d %H:%M:%S')}"]


def _assets(value: Any, report: Mapping[str, Any]) -> list[str]:
    if not value:
        return []
    rows = [["Asset", "Size", "", "Chunk Names"]]
    for asset in value:
        flags = []
        if asset.get("emitted"):
            flags.append("[emitted]")
        if asset.get("comparedForEmit"):
            flags.append("[compared for emit]")
        rows.append(
            [
                str(asset["name"]),
                format_size(asset.get("size", 0)),
                " ".join(flags),
                ", ".join(str(n) for n in asset.get("chunkNames", [])),
            ]
        )
    return _table(rows, right_aligned=(0, 1))


def _assets_by_chunk_name(value: Any, report: Mapping[str, Any]) -> list[str]:
    # The asset table already shows chunk names.
    if "assets" in report or not value:
        return []
    lines = ["Assets by chunk name:"]
    for chunk_name, names in value.items():
        lines.append(f"  {chunk_name}: {', '.join(str(n) for n in names)}")
    return lines


def _hidden(noun: str) -> Callable[[Any, Mapping[str, Any]], list[str]]:
    def section(value: Any, report: Mapping[str, Any]) -> list[str]:
        if not value:
            return []
        return [f" + {value} hidden {_plural(value, noun)}"]

    return section


def _chunks(value: Any, report: Mapping[str, Any]) -> list[str]:
    lines = []
    for chunk in value:
        parts = [f"chunk {{{chunk['id']}}}"]
        parts.extend(str(f) for f in chunk.get("files", []))
        if chunk.get("names"):
            parts.append(f"({', '.join(str(n) for n in chunk['names'])})")
        parts.append(format_size(chunk.get("size", 0)))
        for flag in ("entry", "initial", "rendered"):
            if chunk.get(flag):
                parts.append(f"[{flag}]")
        lines.append(" ".join(parts))
    return lines


def _modules(value: Any, report: Mapping[str, Any]) -> list[str]:
    lines = []
    for module in value:
        parts = [f"[{module['id']}]", str(module["name"]), format_size(module.get("size", 0))]
        parts.extend(f"{{{c}}}" for c in module.get("chunks", []))
        lines.append(" ".join(parts))
    return lines


def _chunk_groups(label: str) -> Callable[[Any, Mapping[str, Any]], list[str]]:
    def section(value: Any, report: Mapping[str, Any]) -> list[str]:
        # Entrypoints are listed once, under their own section.
        shown_elsewhere = report.get("entrypoints", {}) if label == "Chunk Group" else {}
        lines = []
        for name, group in value.items():
            if name in shown_elsewhere:
                continue
            line = f"{label} {name} = {' '.join(str(a) for a in group.get('assets', []))}".rstrip()
            auxiliary = group.get("auxiliaryAssets", [])
            if auxiliary:
                line += f" (auxiliary: {' '.join(str(a) for a in auxiliary)})"
            lines.append(line)
            for relation, assets in group.get("childAssets", {}).items():
                lines.append(f"  {relation}: {' '.join(str(a) for a in assets)}")
        return lines

    return section


def _problems(label: str) -> Callable[[Any, Mapping[str, Any]], list[str]]:
    def section(value: Any, report: Mapping[str, Any]) -> list[str]:
        lines = []
        for problem in value:
            where = " ".join(str(p) for p in (problem.get("moduleName"), problem.get("loc")) if p)
            lines.append(f"{label} in {where}" if where else label)
            lines.append(str(problem["message"]))
        return lines

    return section


def _count(noun: str) -> Callable[[Any, Mapping[str, Any]], list[str]]:
    def section(value: Any, report: Mapping[str, Any]) -> list[str]:
        if not value:
            return []
        return [f"{value} {_plural(value, noun)}"]

    return section


def _plural(count: Any, noun: str) -> str:
    return noun if count == 1 else f"{noun}s"


def _table(rows: list[list[str]], *, right_aligned: tuple[int, ...]) -> list[str]:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    lines = []
    for row in rows:
        cells = [
            cell.rjust(widths[i]) if i in right_aligned else cell.ljust(widths[i]) for i, cell in enumerate(row)
        ]
        lines.append("  ".join(cells).rstrip())
    return lines


_SECTIONS: dict[str, Callable[[Any, Mapping[str, Any]], list[str]]] = {
    "environment": _environment,
    "hash": _labelled("Hash"),
    "version": _labelled("Version"),
    "time": _labelled("Time", "ms"),
    "builtAt": _built_at,
    "publicPath": _labelled("PublicPath"),
    "outputPath": _labelled("Output path"),
    "assets": _assets,
    "assetsByChunkName": _assets_by_chunk_name,
    "filteredAssets": _hidden("asset"),
    "chunks": _chunks,
    "modules": _modules,
    "filteredModules": _hidden("module"),
    "entrypoints": _chunk_groups("Entrypoint"),
    "namedChunkGroups": _chunk_groups("Chunk Group"),
    "errors": _problems("ERROR"),
    "errorsCount": _count("error"),
    "warnings": _problems("WARNING"),
    "warningsCount": _count("warning"),
}
