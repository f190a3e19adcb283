"""Loading build results and stats options from files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import tomli
import yaml
from pydantic import ValidationError

from buildstats.core.types import BuildResult


def parse_document(text: str, *, suffix: str, source: str) -> Any:
    """Parse a JSON, YAML or TOML document based on its file suffix.

    Parameters
    ----------
    text
        Raw document text.
    suffix
        File extension including dot (e.g., '.json', '.yaml').
    source
        Name used in error messages.

    Returns
    -------
    Any
        Parsed document.

    Raises
    ------
    ValueError
        If the suffix is unsupported or the document cannot be parsed.
    """
    suf = suffix.lower()
    if suf == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {source}") from e
    if suf in (".yml", ".yaml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {source}") from e
    if suf == ".toml":
        try:
            return tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse TOML: {source}") from e
    raise ValueError(f"Unsupported document type for {source}")


def load_build_result(path: Path) -> BuildResult:
    """Load a finished build result from a JSON or YAML file.

    Raises
    ------
    ValueError
        If the file cannot be read, parsed, or does not describe a build result.
    """
    if path.suffix.lower() == ".toml":
        raise ValueError(f"Unsupported document type for {path}")
    data = parse_document(_read_text(path), suffix=path.suffix, source=str(path))
    try:
        return BuildResult.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid build result: {path}") from e


def load_options(path: Path) -> dict[str, Any] | str | bool | None:
    """Load a stats options input from a JSON, YAML or TOML file.

    JSON and YAML documents may hold the options directly (a mapping, preset
    name or boolean) or under a top-level ``stats`` key. TOML documents hold
    them in a ``[stats]`` table, or in ``[tool.buildstats.stats]`` when the
    file is a ``pyproject.toml``.

    Parameters
    ----------
    path
        Path to the options file.

    Returns
    -------
    dict[str, Any] | str | bool | None
        Options input, ready for ``resolve_options``.

    Raises
    ------
    ValueError
        If the file cannot be read or parsed, or holds no options.
    """
    data = parse_document(_read_text(path), suffix=path.suffix, source=str(path))
    if path.suffix.lower() == ".toml":
        table = data.get("tool", {}).get("buildstats", {}) if path.name == "pyproject.toml" else data
        if "stats" not in table:
            raise ValueError(f"No stats options found in {path}")
        return table["stats"]
    if isinstance(data, dict) and "stats" in data:
        return data["stats"]
    if data is None or isinstance(data, (dict, str, bool)):
        return data
    raise ValueError(f"Stats options must be a mapping, preset name or boolean: {path}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Failed to read file: {path}") from e
