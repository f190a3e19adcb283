"""Normalization of sparse stats options into an explicit option set.

Resolution is a two-pass merge. The first pass gives every display field
the value of ``all`` (``True`` unless set). The second pass applies the
preset mapping and then the explicitly given keys. Fields that only make
sense together with another field (``filteredAssets`` with ``assets``, ...)
default to their parent's resolved value instead of ``all``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

OptionsInput = Union[Mapping[str, Any], str, bool, None]


class StatsPreset(str, Enum):
    """Named option presets.

    Attributes
    ----------
    NONE
        Nothing is shown.
    SUMMARY
        Version and problem counts.
    ERRORS_ONLY
        Errors only.
    ERRORS_WARNINGS
        Errors and warnings.
    MINIMAL
        Version, timings, assets, modules and problems.
    NORMAL
        Every field (the default).
    DETAILED
        Every field, with ``all`` set explicitly.
    VERBOSE
        Same as DETAILED.
    """

    NONE = "none"
    SUMMARY = "summary"
    ERRORS_ONLY = "errors-only"
    ERRORS_WARNINGS = "errors-warnings"
    MINIMAL = "minimal"
    NORMAL = "normal"
    DETAILED = "detailed"
    VERBOSE = "verbose"


PRESETS: dict[StatsPreset, dict[str, Any]] = {
    StatsPreset.NONE: {"all": False},
    StatsPreset.SUMMARY: {"all": False, "version": True, "errorsCount": True, "warningsCount": True},
    StatsPreset.ERRORS_ONLY: {"all": False, "errors": True, "errorsCount": True},
    StatsPreset.ERRORS_WARNINGS: {
        "all": False,
        "errors": True,
        "errorsCount": True,
        "warnings": True,
        "warningsCount": True,
    },
    StatsPreset.MINIMAL: {
        "all": False,
        "version": True,
        "timings": True,
        "assets": True,
        "modules": True,
        "errors": True,
        "errorsCount": True,
        "warnings": True,
        "warningsCount": True,
    },
    StatsPreset.NORMAL: {},
    StatsPreset.DETAILED: {"all": True},
    StatsPreset.VERBOSE: {"all": True},
}

# Declaration order; report keys follow this order.
DISPLAY_FIELDS: tuple[str, ...] = (
    "env",
    "hash",
    "version",
    "timings",
    "builtAt",
    "publicPath",
    "outputPath",
    "assets",
    "assetsByChunkName",
    "filteredAssets",
    "chunks",
    "modules",
    "filteredModules",
    "entrypoints",
    "chunkGroups",
    "errors",
    "errorsCount",
    "warnings",
    "warningsCount",
)

DEPENDENT_FIELDS: dict[str, str] = {
    "assetsByChunkName": "assets",
    "filteredAssets": "assets",
    "filteredModules": "modules",
}


class ResolvedOptions(BaseModel):
    """Fully explicit stats options.

    Every display field holds a boolean; value fields hold their resolved
    value. Construct through ``resolve_options``.
    """

    env: bool
    hash: bool
    version: bool
    timings: bool
    built_at: bool
    public_path: bool
    output_path: bool
    assets: bool
    assets_by_chunk_name: bool
    filtered_assets: bool
    chunks: bool
    modules: bool
    filtered_modules: bool
    entrypoints: bool
    chunk_groups: bool
    errors: bool
    errors_count: bool
    warnings: bool
    warnings_count: bool
    assets_sort: str = "name"
    exclude_assets: tuple[str, ...] = ()
    exclude_modules: tuple[str, ...] = ()
    env_payload: Any = Field(default=None, alias="_env")

    model_config = {"frozen": True, "extra": "ignore", "alias_generator": to_camel, "populate_by_name": True}

    def enabled(self, option: str) -> bool:
        """Return the resolved flag for a display option given by its option name."""
        return bool(getattr(self, _attribute_name(option)))


def resolve_options(options: OptionsInput = None, *, env_fallback: Any = None) -> ResolvedOptions:
    """Resolve a sparse options input into explicit options.

    Parameters
    ----------
    options
        ``None`` or ``True`` for the normal preset, ``False`` for none, a
        preset name, or a mapping of option names to values. A mapping may
        carry ``all``, ``preset`` and the raw environment payload ``_env``.
    env_fallback
        Environment payload used when the input carries no ``_env``.

    Returns
    -------
    ResolvedOptions
        Explicit options. Unknown keys are ignored; this never raises.
    """
    given = _normalize_input(options)
    explicit: dict[str, Any] = {**_preset_values(given.pop("preset", None)), **given}

    all_value = explicit.get("all")
    default = True if all_value is None else bool(all_value)

    merged: dict[str, Any] = {}
    for name in DISPLAY_FIELDS:
        if name not in DEPENDENT_FIELDS:
            merged[name] = _flag(explicit.get(name), default)
    for name, parent in DEPENDENT_FIELDS.items():
        merged[name] = _flag(explicit.get(name), merged[parent])

    sort = explicit.get("assetsSort")
    if isinstance(sort, str) and sort:
        merged["assetsSort"] = sort
    elif sort is not None:
        logger.warning("Ignoring assetsSort value of type %s", type(sort).__name__)

    for name in ("excludeAssets", "excludeModules"):
        patterns = _patterns(explicit.get(name), name)
        if patterns:
            merged[name] = patterns

    merged["_env"] = explicit["_env"] if "_env" in explicit else env_fallback
    return ResolvedOptions.model_validate(merged)


def _normalize_input(options: OptionsInput) -> dict[str, Any]:
    if options is None or options is True:
        return {"preset": StatsPreset.NORMAL.value}
    if options is False:
        return {"preset": StatsPreset.NONE.value}
    if isinstance(options, str):
        return {"preset": options}
    if isinstance(options, Mapping):
        return dict(options)
    logger.warning("Ignoring stats options of type %s", type(options).__name__)
    return {}


def _preset_values(name: Any) -> dict[str, Any]:
    if name is None:
        return {}
    try:
        preset = StatsPreset(name)
    except ValueError:
        logger.warning("Unknown stats preset %r, using %r", name, StatsPreset.NORMAL.value)
        preset = StatsPreset.NORMAL
    return dict(PRESETS[preset])


def _flag(value: Any, default: bool) -> bool:
    return default if value is None else bool(value)


def _patterns(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(value)
    logger.warning("Ignoring %s value of type %s", name, type(value).__name__)
    return ()


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _attribute_name(option: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", option).lower()
