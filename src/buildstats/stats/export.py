"""Serialization of structured reports for machine consumption."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

import yaml


class ReportFormat(str, Enum):
    """Serialized report format.

    Attributes
    ----------
    JSON
        JSON with 2-space indentation.
    YAML
        Block-style YAML, keys in report order.
    """

    JSON = "json"
    YAML = "yaml"


def dump_report(report: Mapping[str, Any], fmt: ReportFormat | str = ReportFormat.JSON) -> str:
    """Serialize a report.

    Parameters
    ----------
    report
        Report as returned by ``build_report``.
    fmt
        Output format.

    Returns
    -------
    str
        Serialized report ending with a newline.

    Raises
    ------
    ValueError
        If the format is not supported.
    """
    try:
        fmt = ReportFormat(fmt)
    except ValueError as e:
        raise ValueError(f"Unsupported report format: {fmt}") from e

    if fmt is ReportFormat.YAML:
        return yaml.safe_dump(dict(report), sort_keys=False, allow_unicode=True, default_flow_style=False)
    return json.dumps(dict(report), indent=2, ensure_ascii=False) + "\n"
