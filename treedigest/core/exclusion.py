"""ExclusionMatcher — skip entries whose name matches a shell-glob pattern."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from fnmatch import fnmatchcase

from treedigest.config import MAX_PATH
from treedigest.errors import InvalidPatternError

logger = logging.getLogger(__name__)


def _compile(pattern: str) -> tuple[str, ...]:
    """Split *pattern* into lower-cased ``;`` alternatives with ``[`` made literal."""
    if not pattern or not pattern.strip():
        raise InvalidPatternError(f"Empty exclusion pattern: {pattern!r}")
    alternatives = []
    for alt in pattern.split(";"):
        alt = alt.strip()
        if not alt:
            continue
        alternatives.append(alt.lower().replace("[", "[[]"))
    if not alternatives:
        raise InvalidPatternError(f"Exclusion pattern has no alternatives: {pattern!r}")
    return tuple(alternatives)


class ExclusionMatcher:
    """Evaluate entry names against a fixed set of glob patterns.

    Only ``*`` and ``?`` are wildcards; matching is case-insensitive and
    applies to the final path component, so ``*.tmp`` excludes matching
    files and directories at every depth.

    Parameters
    ----------
    patterns:
        Glob patterns; each may hold several ``;``-separated alternatives.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._compiled: tuple[str, ...] = tuple(
            alt for p in self.patterns for alt in _compile(p)
        )

    def __bool__(self) -> bool:
        return bool(self._compiled)

    def matches_name(self, name: str) -> bool:
        """Return True if *name* matches any pattern."""
        folded = name.lower()
        return any(fnmatchcase(folded, alt) for alt in self._compiled)

    def is_excluded(self, path: str, name: str | None = None) -> bool:
        """Return True if the entry at *path* must be skipped.

        *name* overrides the final component of *path* as the matched name.
        Paths longer than ``MAX_PATH`` are never excluded.
        """
        if not self._compiled:
            return False
        if len(path) > MAX_PATH:
            logger.debug("Path too long for exclusion check, keeping: %s", path)
            return False
        if name is None:
            name = os.path.basename(path)
        if self.matches_name(name):
            logger.debug("Excluded %s", path)
            return True
        return False
