"""Hash primitives — uniform streaming interface over MD5 and the SHA family."""

from treedigest.hashing.algorithms import (
    Md5,
    Sha1,
    Sha256,
    Sha384,
    Sha512,
    available_algorithms,
    get_hash,
    is_known_algorithm,
)
from treedigest.hashing.base import HashPrimitive

__all__ = [
    "HashPrimitive",
    "Md5",
    "Sha1",
    "Sha256",
    "Sha384",
    "Sha512",
    "available_algorithms",
    "get_hash",
    "is_known_algorithm",
]
