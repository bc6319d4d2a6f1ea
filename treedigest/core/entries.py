"""DirectoryEntry and the sorted listing of one directory level."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from treedigest.errors import TraversalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    """A child discovered while listing a directory."""

    path: str
    name: str
    is_dir: bool

    @property
    def sort_key(self) -> tuple[str, str]:
        # Case-folded ordinal order; the raw name only separates names that
        # differ in case alone, which case-sensitive filesystems allow.
        return (self.name.casefold(), self.name)


def list_directory(path: str) -> list[DirectoryEntry]:
    """Return the directories and regular files directly under *path*, sorted.

    Other entry kinds (sockets, FIFOs, devices, dangling links) are skipped.

    Raises
    ------
    TraversalError
        If the directory cannot be listed.
    """
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(path) as it:
            for item in it:
                if item.name in (".", ".."):
                    continue
                child = os.path.join(path, item.name)
                if item.is_dir():
                    entries.append(DirectoryEntry(child, item.name, True))
                elif item.is_file():
                    entries.append(DirectoryEntry(child, item.name, False))
                else:
                    logger.warning("Skipping special file %s", child)
    except OSError as exc:
        raise TraversalError(
            f"Failed to list \"{path}\": {exc.strerror or exc}", path=path,
        ) from exc

    entries.sort(key=lambda e: e.sort_key)
    return entries
