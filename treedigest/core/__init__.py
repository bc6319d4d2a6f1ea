"""Tree hashing core — traversal, exclusion, name canonicalization."""

from treedigest.core.canonical import canonicalize, encode_name
from treedigest.core.entries import DirectoryEntry, list_directory
from treedigest.core.exclusion import ExclusionMatcher
from treedigest.core.result import DigestResult
from treedigest.core.tree import TreeHasher

__all__ = [
    "DigestResult",
    "DirectoryEntry",
    "ExclusionMatcher",
    "TreeHasher",
    "canonicalize",
    "encode_name",
    "list_directory",
]
