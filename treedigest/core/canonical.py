"""Name canonicalization for paths fed into the digest."""

from __future__ import annotations

import logging
import os

from treedigest.config import MAX_PATH, NAME_ENCODING

logger = logging.getLogger(__name__)


def canonicalize(path: str) -> str:
    """Return the absolute, normalized text of *path*.

    Resolves ``.`` and ``..`` segments and redundant separators without
    touching the filesystem.  Falls back to *path* unchanged when it, or the
    result, is longer than ``MAX_PATH`` or normalization fails.
    """
    if len(path) > MAX_PATH:
        return path
    try:
        result = os.path.abspath(path)
    except (OSError, ValueError):
        logger.warning("Could not canonicalize %r, using raw path", path)
        return path
    if len(result) > MAX_PATH:
        logger.debug("Canonical form of %s exceeds MAX_PATH, using raw path", path)
        return path
    return result


def encode_name(path: str) -> bytes:
    """Return the bytes fed into the digest for *path*."""
    return canonicalize(path).encode(NAME_ENCODING, errors="surrogatepass")
