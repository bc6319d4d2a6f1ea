"""TreeHasher — deterministic digest over a directory tree or a single file.

Every node is visited in the same order on every run:

1. If the node's own name matches an exclusion pattern, it contributes
   nothing (this holds for the root too).
2. With name inclusion on, the canonical path (UTF-16-LE) is fed.
3. A directory's children are listed, sorted case-insensitively and visited
   in that order, files and directories interleaved.
4. A file's content is streamed in fixed-size chunks.

This order is part of the digest format: changing it changes every digest
recorded with names or exclusions enabled.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import TYPE_CHECKING

from treedigest.config import DEFAULT_CHUNK_SIZE, MAX_PATH, ROOT_PATH_RESERVE
from treedigest.core.canonical import encode_name
from treedigest.core.entries import DirectoryEntry, list_directory
from treedigest.core.exclusion import ExclusionMatcher
from treedigest.core.result import DigestResult
from treedigest.errors import (
    ConfigurationError,
    FileReadError,
    PathError,
    PathNotFoundError,
    PathTooLongError,
    UnknownAlgorithmError,
)
from treedigest.hashing import HashPrimitive, get_hash, is_known_algorithm

if TYPE_CHECKING:
    from treedigest.settings import HashSettings

logger = logging.getLogger(__name__)


def _strip_trailing_separator(path: str) -> str:
    """Drop one trailing ``/`` or ``\\`` unless that would leave a bare root."""
    if len(path) > 1 and path[-1] in ("/", "\\"):
        stripped = path[:-1]
        if stripped and not stripped.endswith(":") and stripped[-1] not in ("/", "\\"):
            return stripped
    return path


def _root_name(path: str) -> str:
    """Return the real name of a root given as e.g. ``.`` or ``sub/..``."""
    try:
        return os.path.basename(os.path.normpath(os.path.abspath(path)))
    except (OSError, ValueError):
        return os.path.basename(path)


class TreeHasher:
    """Compute a single digest over the content (and optionally names) of a tree.

    Parameters
    ----------
    algorithm:
        Hash identifier (MD5, SHA1, SHA256, SHA384, SHA512), case-insensitive.
        ``None`` selects SHA1.
    include_names:
        Feed each visited path's canonical text into the digest.
    exclude:
        Glob patterns matched against entry names.
    chunk_size:
        Read size used when streaming file content.
    """

    def __init__(
        self,
        algorithm: str | None = None,
        include_names: bool = False,
        exclude: Iterable[str] = (),
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if not is_known_algorithm(algorithm):
            raise UnknownAlgorithmError(algorithm or "")
        if chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        self.algorithm = algorithm
        self.include_names = include_names
        self.matcher = ExclusionMatcher(exclude)
        self.chunk_size = chunk_size

    @classmethod
    def from_settings(cls, settings: HashSettings) -> TreeHasher:
        return cls(
            algorithm=settings.algorithm,
            include_names=settings.include_names,
            exclude=settings.exclude,
            chunk_size=settings.chunk_size,
        )

    # ── Public API ───────────────────────────────────────────────────────

    def hash(self, path: str | os.PathLike[str]) -> DigestResult:
        """Hash the file or directory at *path* and return the result.

        Raises
        ------
        PathTooLongError
            If *path* is too long to process safely.
        PathNotFoundError
            If *path* does not exist.
        PathError
            If *path* is neither a regular file nor a directory.
        TraversalError, FileReadError
            If any directory or file in the tree cannot be read.
        """
        raw = os.fspath(path)
        self.validate_root(raw)

        primitive = get_hash(self.algorithm)
        logger.info("Using %s to compute hash of %s", primitive.identifier, raw)
        self.feed(raw, primitive)
        digest = primitive.final()

        return DigestResult(
            algorithm=primitive.identifier,
            digest_size=primitive.digest_size,
            digest=digest,
            path=raw,
            include_names=self.include_names,
            exclude=list(self.matcher.patterns),
        )

    @staticmethod
    def validate_root(path: str) -> None:
        """Reject roots that are too long, missing, or neither a file nor a directory."""
        if len(path) > MAX_PATH - ROOT_PATH_RESERVE:
            raise PathTooLongError(
                f"Input directory/file path is too long. Maximum length is {MAX_PATH} characters",
                path=path,
            )
        if not os.path.exists(path):
            raise PathNotFoundError(f"The given input file doesn't exist: {path}", path=path)
        if not os.path.isdir(path) and not os.path.isfile(path):
            raise PathError(
                f"The given input is neither a regular file nor a directory: {path}",
                path=path,
            )

    def feed(self, path: str, primitive: HashPrimitive) -> None:
        """Stream the tree at *path* into *primitive* without finalizing it."""
        if os.path.isdir(path):
            stripped = _strip_trailing_separator(path)
            root = DirectoryEntry(stripped, _root_name(stripped), True)
        else:
            root = DirectoryEntry(path, _root_name(path), False)

        files = dirs = total = 0
        stack: list[DirectoryEntry] = [root]
        while stack:
            entry = stack.pop()
            if self.matcher.is_excluded(entry.path, entry.name):
                continue

            if self.include_names:
                primitive.update(encode_name(entry.path))

            if entry.is_dir:
                children = list_directory(entry.path)
                logger.debug("Entering %s (%d entries)", entry.path, len(children))
                # Reversed so the first child in sort order is popped next.
                stack.extend(reversed(children))
                dirs += 1
            else:
                total += self._hash_file(entry.path, primitive)
                files += 1

        logger.info("Hashed %d files in %d directories (%d bytes)", files, dirs, total)

    # ── Internals ────────────────────────────────────────────────────────

    def _hash_file(self, path: str, primitive: HashPrimitive) -> int:
        """Stream the content of *path* into *primitive*; return the byte count."""
        size = 0
        try:
            f = open(path, "rb")
        except OSError as exc:
            raise FileReadError(
                f"Failed to open file \"{path}\" for reading: {exc.strerror or exc}",
                path=path,
            ) from exc
        with f:
            try:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    primitive.update(chunk)
                    size += len(chunk)
            except OSError as exc:
                raise FileReadError(
                    f"Failed to read file \"{path}\" after {size} bytes: {exc.strerror or exc}",
                    path=path,
                ) from exc
        logger.debug("Hashed file %s (%d bytes)", path, size)
        return size
