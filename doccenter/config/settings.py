"""
Runtime settings for doccenter.

Settings are read from environment variables, optionally seeded from a
``.env`` file. The YAML tables ship inside this package; DOCCENTER_CONFIG_DIR
points the loaders at another directory holding files of the same names.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

PACKAGE_CONFIG_DIR = Path(__file__).resolve().parent

CANDIDATE_KEYS_FILE = "candidate_keys.yaml"
FIELD_RULES_FILE = "field_rules.yaml"
DOCUMENT_PROFILES_FILE = "document_profiles.yaml"
DOCUMENT_SCHEMAS_FILE = "document_schemas.yaml"

_TRUE_VALUES = ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime settings.

    Attributes:
        strict_mode: Block document generation while required fields are invalid
        config_dir: Directory holding the YAML tables
        log_level: Log level name
        log_format: "json" or "text"
        metrics_port: Port for the Prometheus endpoint (None disables it)
    """

    strict_mode: bool = False
    config_dir: Path = PACKAGE_CONFIG_DIR
    log_level: str = "INFO"
    log_format: str = Field("json", pattern="^(json|text)$")
    metrics_port: int | None = Field(None, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def config_path(self, filename: str) -> Path:
        """Path of a YAML table, preferring config_dir over the packaged copy."""
        candidate = Path(self.config_dir) / filename
        if candidate.exists():
            return candidate
        return PACKAGE_CONFIG_DIR / filename


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: Optional .env file loaded first (existing variables win)

    Returns:
        Settings instance
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    metrics_port = os.getenv("METRICS_PORT")
    return Settings(
        strict_mode=os.getenv("DOCCENTER_STRICT_MODE", "false").strip().lower() in _TRUE_VALUES,
        config_dir=Path(os.getenv("DOCCENTER_CONFIG_DIR", str(PACKAGE_CONFIG_DIR))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "json"),
        metrics_port=int(metrics_port) if metrics_port else None,
    )
