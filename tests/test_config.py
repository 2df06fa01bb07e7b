"""Tests for TenantScopeConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from tenantscope import ConfigurationError, GuardConfig, LogLevel, TenantScopeConfig, load_config_from_env


class TestTenantScopeConfig:
    """Tests for TenantScopeConfig model."""

    def test_defaults(self) -> None:
        """Test creating a config with defaults."""
        config = TenantScopeConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.tenant_page_size == 100
        assert config.guard == GuardConfig()

    def test_log_level_from_string(self) -> None:
        config = TenantScopeConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            TenantScopeConfig(log_level="LOUD")

    @pytest.mark.parametrize("size", [0, 1001])
    def test_page_size_bounds(self, size: int) -> None:
        with pytest.raises(ValidationError):
            TenantScopeConfig(tenant_page_size=size)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TenantScopeConfig(redis_url="redis://localhost")


class TestGuardConfig:
    """Tests for GuardConfig model."""

    def test_defaults(self) -> None:
        config = GuardConfig()
        assert config.login_path == "/app/login"
        assert config.unauthorized_path == "/app/dashboard"

    def test_frozen(self) -> None:
        config = GuardConfig()
        with pytest.raises(ValidationError):
            config.login_path = "/elsewhere"


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_load_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.tenant_page_size == 100

    def test_load_from_env(self) -> None:
        env = {
            "LOG_LEVEL": "WARNING",
            "LOG_JSON": "true",
            "TENANTSCOPE_TENANT_PAGE_SIZE": "50",
            "TENANTSCOPE_LOGIN_PATH": "/signin",
            "TENANTSCOPE_UNAUTHORIZED_PATH": "/forbidden",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()
        assert config.log_level == LogLevel.WARNING
        assert config.log_json is True
        assert config.tenant_page_size == 50
        assert config.guard.login_path == "/signin"
        assert config.guard.unauthorized_path == "/forbidden"

    @pytest.mark.parametrize(
        "env",
        [
            {"TENANTSCOPE_LOGIN_PATH": "signin"},
            {"TENANTSCOPE_TENANT_PAGE_SIZE": "abc"},
            {"TENANTSCOPE_TENANT_PAGE_SIZE": "0"},
            {"LOG_LEVEL": "LOUD"},
        ],
    )
    def test_bad_values_raise_configuration_error(self, env: dict[str, str]) -> None:
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError) as exc_info:
                load_config_from_env()
        assert exc_info.value.code == "CONFIGURATION_ERROR"
