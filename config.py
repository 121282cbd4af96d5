"""Configuration management for the UReduce URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    db_host: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )

    db_port: int = Field(
        default=5432,
        description="PostgreSQL port"
    )

    db_user: str = Field(
        default="postgres",
        description="PostgreSQL user"
    )

    db_password: str = Field(
        default="",
        description="PostgreSQL password"
    )

    db_name: str = Field(
        default="postgres",
        description="PostgreSQL database name"
    )

    db_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the asyncpg connection pool"
    )

    # Startup connectivity check
    connect_max_attempts: int = Field(
        default=5,
        ge=1,
        description="Number of attempts to reach the database at startup"
    )

    connect_retry_delay_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Delay between startup connection attempts"
    )

    connect_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Timeout for a single startup connection attempt"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    # Short code settings
    short_code_length: int = Field(
        default=8,
        ge=4,
        le=32,
        description="Number of hex characters in a generated short code"
    )

    detect_collisions: bool = Field(
        default=True,
        description="Widen the short code when its prefix is taken by a different URL"
    )

    strict_persistence: bool = Field(
        default=False,
        description="Fail /shorten with 500 when the insert fails instead of returning the code anyway"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def dsn(self) -> str:
        """Connection target with the password masked, for log output."""
        return f"postgresql://{self.db_user}:***@{self.db_host}:{self.db_port}/{self.db_name}"


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
