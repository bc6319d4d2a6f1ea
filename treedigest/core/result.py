"""DigestResult model and its text renderings."""

from __future__ import annotations

import json
import ntpath
from typing import Any

from pydantic import BaseModel, Field, model_validator


class DigestResult(BaseModel):
    """The outcome of a successful tree hash."""

    algorithm: str
    digest_size: int
    digest: bytes
    path: str = ""
    include_names: bool = False
    exclude: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_size(self) -> "DigestResult":
        if len(self.digest) != self.digest_size:
            raise ValueError(
                f"digest is {len(self.digest)} bytes, expected {self.digest_size}"
            )
        return self

    @property
    def hexdigest(self) -> str:
        """Upper-case hexadecimal digest, no separators."""
        return self.digest.hex().upper()

    @property
    def display_name(self) -> str:
        """Final component of the root path (as the CLI shows it)."""
        # ntpath splits on both separators
        return ntpath.basename(self.path.rstrip("/\\")) or self.path

    def render(self) -> str:
        """Console line, e.g. ``SHA256 (32 bytes) = 559AEAD0...``."""
        return f"{self.algorithm} ({self.digest_size} bytes) = {self.hexdigest}"

    def render_for_file(self) -> str:
        """Result-file line, which also names the hashed path."""
        return (
            f'{self.algorithm} hash of "{self.display_name}" '
            f"({self.digest_size} bytes) = {self.hexdigest}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "digest_size": self.digest_size,
            "hexdigest": self.hexdigest,
            "path": self.path,
            "include_names": self.include_names,
            "exclude": list(self.exclude),
        }

    def to_json(self) -> str:
        """Return structured JSON."""
        return json.dumps(self.to_dict(), indent=2)
