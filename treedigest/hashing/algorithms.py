"""Concrete hash primitives and identifier lookup."""

from __future__ import annotations

import hashlib
import logging
from typing import Any

from treedigest.config import DEFAULT_ALGORITHM
from treedigest.errors import UnknownAlgorithmError
from treedigest.hashing.base import HashPrimitive

logger = logging.getLogger(__name__)


class Md5(HashPrimitive):
    identifier = "MD5"
    digest_size = 16

    def _new_state(self) -> Any:
        return hashlib.md5()


class Sha1(HashPrimitive):
    identifier = "SHA1"
    digest_size = 20

    def _new_state(self) -> Any:
        return hashlib.sha1()


class Sha256(HashPrimitive):
    identifier = "SHA256"
    digest_size = 32

    def _new_state(self) -> Any:
        return hashlib.sha256()


class Sha384(HashPrimitive):
    identifier = "SHA384"
    digest_size = 48

    def _new_state(self) -> Any:
        return hashlib.sha384()


class Sha512(HashPrimitive):
    identifier = "SHA512"
    digest_size = 64

    def _new_state(self) -> Any:
        return hashlib.sha512()


# Closed set, in the order the algorithms are listed to users
_ALGORITHMS: dict[str, type[HashPrimitive]] = {
    cls.identifier: cls for cls in (Md5, Sha1, Sha256, Sha384, Sha512)
}


def available_algorithms() -> list[str]:
    """Return the supported identifiers."""
    return list(_ALGORITHMS)


def is_known_algorithm(identifier: str | None) -> bool:
    if not identifier:
        return True
    return identifier.upper() in _ALGORITHMS


def get_hash(identifier: str | None = None) -> HashPrimitive:
    """Create a primitive for *identifier* (case-insensitive).

    ``None`` or an empty string selects SHA1.

    Raises
    ------
    UnknownAlgorithmError
        If *identifier* names no supported algorithm.
    """
    key = (identifier or DEFAULT_ALGORITHM).upper()
    cls = _ALGORITHMS.get(key)
    if cls is None:
        raise UnknownAlgorithmError(identifier or "")
    logger.debug("Selected hash algorithm %s", key)
    return cls()
