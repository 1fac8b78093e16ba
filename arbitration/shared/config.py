"""
Configuration management for the arbitrator service.
"""

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class LoggingConfig(BaseSettings):
    """Logging configuration."""
    level: str = "INFO"
    json_format: bool = False


class ArbitratorConfig(BaseSettings):
    """Main arbitrator configuration."""

    model_config = {"env_prefix": "ARBITER_", "env_nested_delimiter": "__"}

    # Environment
    environment: str = Field(default="development")

    # Identities
    owner: str = Field(default="")
    address: str = Field(default="")  # The arbitrator's own principal

    # Fees (wei)
    default_dispute_fee: int = Field(default=0, ge=0, lt=2**256)
    question_fee: int = Field(default=0, ge=0, lt=2**256)

    # Terms of service, expected JSON
    metadata: str = Field(default="")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache
def get_config() -> ArbitratorConfig:
    """Get cached configuration instance."""
    # Load .env file if present
    from dotenv import load_dotenv
    load_dotenv()

    return ArbitratorConfig()


def require_env(name: str) -> str:
    """Get required environment variable."""
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def get_env(name: str, default: str = "") -> str:
    """Get optional environment variable with default."""
    return os.environ.get(name, default)
