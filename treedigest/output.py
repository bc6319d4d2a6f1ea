"""ResultWriter — append rendered digests to a text result file."""

from __future__ import annotations

import logging
from pathlib import Path

from treedigest.core.result import DigestResult
from treedigest.errors import ResultFileError

logger = logging.getLogger(__name__)


class ResultWriter:
    """Append one line per result to *path*, creating the file if needed."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def ensure_writable(self) -> None:
        """Open the file for appending once, so failures surface before hashing."""
        try:
            with self.path.open("a", encoding="utf-8"):
                pass
        except OSError as exc:
            raise ResultFileError(
                f"Failed to open the result file for writing: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def write(self, result: DigestResult) -> None:
        line = result.render_for_file()
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            raise ResultFileError(
                f"Failed to append to the result file: {exc.strerror or exc}",
                path=self.path,
            ) from exc
        logger.info("Appended result to %s", self.path)
