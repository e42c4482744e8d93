"""
Shared configuration management for the token service.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Signing
    hs256_secret: Optional[SecretStr] = Field(default=None)
    default_ttl_seconds: int = Field(default=3600, gt=0)

    # Verification
    verify_expiration: bool = Field(default=True)
    verify_not_before: bool = Field(default=True)
    strip_bearer_prefix: bool = Field(default=True)

    # Reports an algorithm mismatch as AlgorithmMismatchError. Debug only.
    debug_algorithm_errors: bool = Field(default=False)


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str

    def __init__(self, service_name: str, **kwargs):
        super().__init__(service_name=service_name, **kwargs)


def get_config(service_name: str, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, **overrides)
