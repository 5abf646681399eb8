import logging

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings, read from the environment and an optional ``.env`` file."""

    # Secrets Manager id of {"host", "port", "username", "password"}
    db_secret_arn: str | None = None
    aws_region: str = "us-east-2"
    # Direct SQLAlchemy URL; when set the secret store is not used
    database_url: str | None = None
    db_name: str = "postgres"

    db_ssl: bool = True
    db_ssl_verify: bool = True
    db_ssl_root_cert: str | None = None

    db_pool_size: int = Field(default=1, ge=1)
    db_max_overflow: int = Field(default=2, ge=0)
    db_pool_recycle: int = Field(default=900, ge=-1)

    fallback_status_code: int = Field(default=500, ge=400, le=599)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if not isinstance(logging.getLevelName(upper), int):
            raise ValueError(f"unknown log level {v!r}")
        return upper

    @model_validator(mode="after")
    def require_database_source(self) -> "Settings":
        if not self.db_secret_arn and not self.database_url:
            raise ValueError("either DB_SECRET_ARN or DATABASE_URL must be set")
        return self

    @property
    def uses_secret_store(self) -> bool:
        return self.database_url is None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()
