"""treedigest — reproducible cryptographic digests of directory trees and files."""

__version__ = "1.0.0"

from treedigest.api import hash_path
from treedigest.core.canonical import canonicalize, encode_name
from treedigest.core.entries import DirectoryEntry
from treedigest.core.exclusion import ExclusionMatcher
from treedigest.core.result import DigestResult
from treedigest.core.tree import TreeHasher
from treedigest.errors import (
    ConfigurationError,
    FileReadError,
    HashStateError,
    InvalidPatternError,
    PathError,
    PathNotFoundError,
    PathTooLongError,
    ResultFileError,
    TraversalError,
    TreeDigestError,
    UnknownAlgorithmError,
)
from treedigest.hashing import HashPrimitive, available_algorithms, get_hash
from treedigest.output import ResultWriter
from treedigest.settings import HashSettings, SettingsManager

__all__ = [
    "__version__",
    # Core
    "DigestResult",
    "DirectoryEntry",
    "ExclusionMatcher",
    "TreeHasher",
    "canonicalize",
    "encode_name",
    "hash_path",
    # Hashing
    "HashPrimitive",
    "available_algorithms",
    "get_hash",
    # Settings & output
    "HashSettings",
    "ResultWriter",
    "SettingsManager",
    # Errors
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
]
