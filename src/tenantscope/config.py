"""Configuration contract for tenantscope.

Pydantic-validated models for everything the embedding application
supplies: logging switches, the tenant-directory page size, and the
route guard's redirect targets. Per-region requirements are not config;
they are passed to each ``RouteGuard`` instance.

``load_config_from_env()`` is the only place that reads the process
environment. Everything else receives a ``TenantScopeConfig``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GuardConfig(BaseModel):
    """Redirect targets used by the route guard.

    Environment variables:
        TENANTSCOPE_LOGIN_PATH         — where unauthenticated principals go
        TENANTSCOPE_UNAUTHORIZED_PATH  — where authenticated but denied principals go
    """

    model_config = {"extra": "ignore", "frozen": True}

    login_path: str = Field(
        default="/app/login",
        description="Redirect target for principals that are not signed in",
    )
    unauthorized_path: str = Field(
        default="/app/dashboard",
        description="Redirect target for principals lacking a required role",
    )

    @field_validator("login_path", "unauthorized_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Redirect targets must be absolute in-app paths."""
        if not v.startswith("/"):
            raise ValueError(f"Redirect path must start with '/': {v!r}")
        return v


class TenantScopeConfig(BaseModel):
    """Top-level configuration for the access-control and scope engine."""

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    # Tenant directory
    tenant_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Page size requested from the tenant directory on customer change",
    )

    guard: GuardConfig = Field(
        default_factory=GuardConfig,
        description="Route guard redirect targets",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def load_config_from_env() -> TenantScopeConfig:
    """Load configuration from environment variables.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - TENANTSCOPE_TENANT_PAGE_SIZE: Tenant directory page size (default: 100)
    - TENANTSCOPE_LOGIN_PATH: Unauthenticated redirect target
    - TENANTSCOPE_UNAUTHORIZED_PATH: Unauthorized redirect target

    Returns:
        TenantScopeConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: If a variable is set to an unusable value.
    """
    import os

    try:
        guard = GuardConfig(
            login_path=os.getenv("TENANTSCOPE_LOGIN_PATH", "/app/login"),
            unauthorized_path=os.getenv("TENANTSCOPE_UNAUTHORIZED_PATH", "/app/dashboard"),
        )

        return TenantScopeConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes"),
            tenant_page_size=int(os.getenv("TENANTSCOPE_TENANT_PAGE_SIZE", "100")),
            guard=guard,
        )
    except ValueError as e:
        raise ConfigurationError(f"Invalid tenantscope environment configuration: {e}") from e


__all__ = [
    "GuardConfig",
    "LogLevel",
    "TenantScopeConfig",
    "load_config_from_env",
]
