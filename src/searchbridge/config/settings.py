"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (SEARCHBRIDGE_ prefix)
  2. YAML config file (if specified)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class SolrSettings(BaseModel):
    """Connection and behavior settings of the Solr backend."""

    base_url: str = Field(default="http://localhost:8983/solr", description="Solr base URL")
    collection: str = Field(default="documents", description="Solr collection/core name")
    username: str | None = Field(default=None, description="Basic-auth username")
    password: str | None = Field(default=None, description="Basic-auth password")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    retrieve_data: bool = Field(default=False, description="Retrieve stored field values with results")
    site_hash: str = Field(default="", description="Hash scoping locally indexed documents to this install")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")
    debug: bool = Field(default=False, description="Force DEBUG level and keep HTTP client logs")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SEARCHBRIDGE_ prefix.
    Nested settings use double underscores: SEARCHBRIDGE_SOLR__COLLECTION=docs

    Example:
        SEARCHBRIDGE_SOLR__BASE_URL=http://solr:8983/solr
        SEARCHBRIDGE_SOLR__RETRIEVE_DATA=true
        SEARCHBRIDGE_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "SEARCHBRIDGE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    solr: SolrSettings = Field(default_factory=SolrSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
