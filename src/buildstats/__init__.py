"""Statistics reports for finished bundler builds."""

from __future__ import annotations

from buildstats.core.types import BuildResult
from buildstats.stats.stats import Stats

__version__ = "0.1.0"

__all__ = ["BuildResult", "Stats", "__version__"]
