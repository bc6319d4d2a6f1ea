"""One-call entry point for hashing a path."""

from __future__ import annotations

import os
from collections.abc import Iterable

from treedigest.config import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE
from treedigest.core.result import DigestResult
from treedigest.core.tree import TreeHasher


def hash_path(
    path: str | os.PathLike[str],
    algorithm: str | None = DEFAULT_ALGORITHM,
    include_names: bool = False,
    exclude: Iterable[str] = (),
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> DigestResult:
    """Return the tree digest of the file or directory at *path*.

    >>> hash_path("build/", "sha256", exclude=["*.tmp"]).render()  # doctest: +SKIP
    'SHA256 (32 bytes) = ...'
    """
    hasher = TreeHasher(
        algorithm=algorithm,
        include_names=include_names,
        exclude=exclude,
        chunk_size=chunk_size,
    )
    return hasher.hash(path)
