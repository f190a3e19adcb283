"""Glob exclusion rules for asset and module names."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import PurePosixPath


@dataclass(frozen=True)
class NameRule:
    """Compiled glob rule.

    Attributes
    ----------
    pattern
        Glob pattern without anchoring characters.
    anchored
        True if pattern was '/'-prefixed.
    has_slash
        True if pattern contains a path separator.
    """

    pattern: str
    anchored: bool
    has_slash: bool


def compile_name_rules(patterns: tuple[str, ...] | list[str]) -> list[NameRule]:
    """Compile glob patterns into name rules.

    Blank patterns are skipped. A pattern without a slash matches the last
    path segment anywhere; a '/'-prefixed pattern matches from the start of
    the name; '**' spans any number of segments.
    """
    rules: list[NameRule] = []
    for raw in patterns:
        pat = raw.strip()
        if not pat:
            continue
        anchored = pat.startswith("/")
        if anchored:
            pat = pat.lstrip("/")
            if not pat:
                continue
        rules.append(NameRule(pattern=pat, anchored=anchored, has_slash="/" in pat))
    return rules


@dataclass(frozen=True)
class NameFilter:
    """Predicate that excludes names matching any rule.

    Attributes
    ----------
    rules
        Exclusion rules; an empty list excludes nothing.
    """

    rules: list[NameRule]

    @classmethod
    def from_patterns(cls, patterns: tuple[str, ...] | list[str]) -> NameFilter:
        return cls(compile_name_rules(patterns))

    def excludes(self, name: str) -> bool:
        """Return True if ``name`` matches any exclusion rule."""
        if not self.rules:
            return False
        path = PurePosixPath(name.replace("\\", "/").strip("/") or ".")
        return any(_match_single(path, rule) for rule in self.rules)


def _match_single(path: PurePosixPath, rule: NameRule) -> bool:
    segments = tuple(p for p in path.parts if p not in (".", ".."))
    if not segments:
        return False
    if not rule.has_slash and not rule.anchored:
        return fnmatchcase(segments[-1], rule.pattern)

    pattern = tuple(part for part in rule.pattern.split("/") if part)
    starts = (0,) if rule.anchored else range(len(segments))
    return any(_matches_from(pattern, segments, start) for start in starts)


def _matches_from(pattern: tuple[str, ...], segments: tuple[str, ...], start: int) -> bool:
    """Match ``pattern`` against ``segments[start:]`` to the last segment.

    Walks the pattern once, tracking every segment index it could have
    reached; ``**`` reaches any index at or after the current ones.
    """
    reached = {start}
    for part in pattern:
        if part == "**":
            reached = set(range(min(reached), len(segments) + 1))
        else:
            reached = {i + 1 for i in reached if i < len(segments) and fnmatchcase(segments[i], part)}
        if not reached:
            return False
    return len(segments) in reached
