"""Stats facade over a finished build."""

from __future__ import annotations

from functools import cached_property
from typing import Any

from buildstats.core.types import BuildResult
from buildstats.stats.builder import build_report
from buildstats.stats.facts import BuildFacts, extract_facts
from buildstats.stats.options import OptionsInput, ResolvedOptions, resolve_options
from buildstats.stats.render import render_report


class Stats:
    """Report entry point for one build result.

    Facts are extracted on first use and reused by later reports. The build
    result must not change while a ``Stats`` instance is in use.

    Parameters
    ----------
    build
        Finished build result.
    """

    def __init__(self, build: BuildResult) -> None:
        self.build = build

    @cached_property
    def facts(self) -> BuildFacts:
        return extract_facts(self.build)

    def resolve(self, options: OptionsInput = None) -> ResolvedOptions:
        """Resolve options, falling back to the build's environment payload."""
        return resolve_options(options, env_fallback=self.build.env_context)

    def to_json(self, options: OptionsInput = None) -> dict[str, Any]:
        """Return the structured report for ``options``."""
        return build_report(self.facts, self.resolve(options))

    def to_string(self, options: OptionsInput = None) -> str:
        """Return the text report for ``options``; equal to rendering ``to_json(options)``."""
        return render_report(self.to_json(options))

    def has_errors(self) -> bool:
        return bool(self.build.errors)

    def has_warnings(self) -> bool:
        return bool(self.build.warnings)
