"""Typed error taxonomy for tree hashing.

Every failure aborts the whole run: there is no partial digest, so callers
only ever see one terminal error, carrying the offending path where there
is one.
"""

from __future__ import annotations

from pathlib import Path


class TreeDigestError(Exception):
    """Base class for all treedigest errors."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


# ── Configuration ────────────────────────────────────────────────────────────

class ConfigurationError(TreeDigestError):
    """Invalid run configuration (algorithm, pattern, settings value)."""


class UnknownAlgorithmError(ConfigurationError):
    """Raised when a hash algorithm identifier is not recognised."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Argument \"{identifier}\" not recognized as a hash algorithm")
        self.identifier = identifier


class InvalidPatternError(ConfigurationError):
    """Raised for an empty or blank exclusion pattern."""


class ResultFileError(ConfigurationError):
    """Raised when the result file cannot be opened for appending."""


# ── Paths ────────────────────────────────────────────────────────────────────

class PathError(TreeDigestError):
    """The traversal root is unusable."""


class PathNotFoundError(PathError):
    """The traversal root does not exist."""


class PathTooLongError(PathError):
    """The traversal root exceeds the maximum supported length."""


# ── Traversal ────────────────────────────────────────────────────────────────

class FileReadError(TreeDigestError):
    """A file could not be opened or read during traversal."""


class TraversalError(TreeDigestError):
    """A directory could not be listed during traversal."""


class HashStateError(TreeDigestError):
    """A finalized hash primitive was used without re-initialisation."""


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'PathNotFoundError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name


__all__ = [
    "ConfigurationError",
    "FileReadError",
    "HashStateError",
    "InvalidPatternError",
    "PathError",
    "PathNotFoundError",
    "PathTooLongError",
    "ResultFileError",
    "TraversalError",
    "TreeDigestError",
    "UnknownAlgorithmError",
    "format_error",
]
