"""
Configuration for neo4j_kb.

Settings are read from environment variables via pydantic-settings.
Connection options use the ``NEO4J_`` prefix, e.g.::

    NEO4J_URL=http://localhost:7474
    NEO4J_AUTH=neo4j:secret
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Neo4jSettings(BaseSettings):
    """Neo4j HTTP transaction endpoint settings."""

    model_config = SettingsConfigDict(env_prefix="NEO4J_", extra="ignore")

    url: str = Field(default="http://localhost:7474", description="Base URL of the Neo4j HTTP API")
    auth: SecretStr | None = Field(default=None, description="Credentials as '<username>:<password>'")
    transaction_path: str = Field(default="/db/data/transaction/commit")
    timeout: float = Field(default=30.0, gt=0.0, le=300.0, description="Request timeout in seconds")
    max_connections: int = Field(default=16, ge=1, le=256)
    updated_by: str = Field(default="bot", min_length=1, description="Audit value written by legalize()")

    @field_validator("auth")
    @classmethod
    def _check_auth_format(cls, v: SecretStr | None) -> SecretStr | None:
        if v is not None and ":" not in v.get_secret_value():
            raise ValueError("NEO4J_AUTH must be of the form '<username>:<password>'")
        return v

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class Settings(BaseSettings):
    """Top-level settings container."""

    model_config = SettingsConfigDict(extra="ignore")

    neo4j: Neo4jSettings = Field(default_factory=Neo4jSettings)


settings = Settings()
