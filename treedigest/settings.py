"""HashSettings model and SettingsManager — layered run configuration."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from treedigest.config import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    SETTINGS_DIR,
    SETTINGS_FILE,
)
from treedigest.errors import ConfigurationError, InvalidPatternError, UnknownAlgorithmError
from treedigest.hashing import is_known_algorithm

logger = logging.getLogger(__name__)

# Environment keys, the settings field each one feeds, and its template default
_ENV_KEYS: dict[str, dict[str, str]] = {
    "TREEDIGEST_ALGORITHM": {
        "field": "algorithm",
        "default": DEFAULT_ALGORITHM,
        "description": "Hash algorithm (MD5, SHA1, SHA256, SHA384, SHA512)",
    },
    "TREEDIGEST_INCLUDE_NAMES": {
        "field": "include_names",
        "default": "false",
        "description": "Include canonical path names in the digest",
    },
    "TREEDIGEST_EXCLUDE": {
        "field": "exclude",
        "default": "",
        "description": "Comma-separated exclusion glob patterns",
    },
    "TREEDIGEST_CHUNK_SIZE": {
        "field": "chunk_size",
        "default": str(DEFAULT_CHUNK_SIZE),
        "description": "Read size in bytes when streaming files",
    },
    "TREEDIGEST_RESULT_FILE": {
        "field": "result_file",
        "default": "",
        "description": "Text file the result line is appended to",
    },
    "TREEDIGEST_LOG_LEVEL": {
        "field": "log_level",
        "default": "WARNING",
        "description": "Logging level",
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class HashSettings(BaseModel):
    """Validated configuration for one hashing run."""

    algorithm: str = DEFAULT_ALGORITHM
    include_names: bool = False
    exclude: list[str] = Field(default_factory=list)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    result_file: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("algorithm")
    @classmethod
    def _known_algorithm(cls, v: str) -> str:
        if not is_known_algorithm(v):
            raise ValueError(f"unknown hash algorithm {v!r}")
        return (v or DEFAULT_ALGORITHM).upper()

    @field_validator("exclude")
    @classmethod
    def _nonblank_patterns(cls, v: list[str]) -> list[str]:
        for pattern in v:
            if not pattern.strip():
                raise ValueError("exclusion patterns must not be blank")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level


def build_settings(data: dict[str, Any]) -> HashSettings:
    """Validate *data* into HashSettings, mapping failures onto the error taxonomy."""
    try:
        return HashSettings(**data)
    except ValidationError as exc:
        fields = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
        if "algorithm" in fields:
            raise UnknownAlgorithmError(str(data.get("algorithm", ""))) from exc
        if "exclude" in fields:
            raise InvalidPatternError(f"Invalid exclusion pattern list: {data.get('exclude')!r}") from exc
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


def _coerce_env(field: str, raw: str) -> Any:
    if field == "include_names":
        return raw.strip().lower() in _TRUE_VALUES
    if field == "exclude":
        return [p.strip() for p in raw.split(",") if p.strip()]
    if field == "chunk_size":
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigurationError(f"TREEDIGEST_CHUNK_SIZE is not an integer: {raw!r}") from exc
    if field == "result_file":
        return raw or None
    return raw


class SettingsManager:
    """Resolve HashSettings from defaults, project file, environment and overrides."""

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Create .env.example listing every environment key.

        Returns the path to the generated file.
        """
        env_path = Path(project_path) / ".env.example"

        lines = ["# treedigest configuration template", ""]
        for key, info in _ENV_KEYS.items():
            lines.append(f"# {info['description']}")
            lines.append(f"{key}={info['default']}")
            lines.append("")

        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_settings(self, project_path: str | Path = ".", **overrides: Any) -> HashSettings:
        """Merge defaults -> .treedigest/config.json -> .env -> env vars -> overrides.

        Overrides whose value is ``None`` are ignored, so unset CLI flags do
        not mask lower layers.
        """
        data: dict[str, Any] = {}

        # 1. Project settings file
        settings_json = Path(project_path) / SETTINGS_DIR / SETTINGS_FILE
        if settings_json.is_file():
            try:
                loaded = json.loads(settings_json.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    data.update(loaded)
                else:
                    logger.debug("Ignoring non-object %s", settings_json)
            except (json.JSONDecodeError, OSError):
                logger.debug("Could not read %s", settings_json, exc_info=True)

        # 2. .env file (same keys as the environment, see generate_env_template)
        env_file = Path(project_path) / ".env"
        if env_file.is_file():
            try:
                for line in env_file.read_text(encoding="utf-8").splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        info = _ENV_KEYS.get(k.strip())
                        if info is not None:
                            data[info["field"]] = _coerce_env(info["field"], v.strip())
            except OSError:
                logger.debug("Could not read %s", env_file, exc_info=True)

        # 3. Environment variables
        for key, info in _ENV_KEYS.items():
            env_val = os.environ.get(key)
            if env_val is not None:
                data[info["field"]] = _coerce_env(info["field"], env_val)

        # 4. Explicit overrides
        for field, value in overrides.items():
            if value is not None:
                data[field] = value

        settings = build_settings(data)
        logger.debug("Resolved settings: %s", settings.model_dump())
        return settings
