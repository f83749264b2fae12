"""Unit tests for Settings.

Tests cover:
- Required secret key length
- bcrypt rounds bounds
- Positive impersonation durations
- URL normalization
- Environment helpers and JSON log selection
"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment

VALID = {
    "database_url": "sqlite+aiosqlite:///:memory:",
    "secret_key": "k" * 32,
}


def _settings(**overrides) -> Settings:
    return Settings(**{**VALID, **overrides})


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validators."""

    def test_defaults(self):
        settings = _settings(environment="production", log_json=None)

        assert settings.access_token_expire_minutes == 30
        assert settings.impersonation_token_expire_minutes == 240
        assert settings.impersonation_timeout_hours == 4
        assert settings.audit_logs_per_page == 25
        assert settings.api_v1_prefix == "/api/v1"

    def test_short_secret_key(self):
        with pytest.raises(ValidationError, match="at least 32 characters"):
            _settings(secret_key="short")

    @pytest.mark.parametrize("rounds", [3, 21])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError, match="between 4 and 20"):
            _settings(bcrypt_rounds=rounds)

    @pytest.mark.parametrize(
        "field", ["impersonation_timeout_hours", "impersonation_token_expire_minutes"]
    )
    def test_durations_must_be_positive(self, field):
        with pytest.raises(ValidationError, match="must be positive"):
            _settings(**{field: 0})

    def test_api_base_url_trailing_slash_removed(self):
        settings = _settings(api_base_url="https://api.example.com///")

        assert settings.api_base_url == "https://api.example.com"


@pytest.mark.unit
class TestSettingsEnvironment:
    """Test environment helpers."""

    def test_environment_flags(self):
        settings = _settings(environment="testing")

        assert settings.environment == Environment.TESTING
        assert settings.is_testing is True
        assert settings.is_development is False
        assert settings.is_production is False

    @pytest.mark.parametrize(
        ("environment", "log_json", "expected"),
        [
            ("development", None, False),
            ("production", None, True),
            ("development", True, True),
            ("production", False, False),
        ],
    )
    def test_use_json_logs(self, environment, log_json, expected):
        settings = _settings(environment=environment, log_json=log_json)

        assert settings.use_json_logs is expected
