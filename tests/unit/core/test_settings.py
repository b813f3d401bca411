"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from amtt.core.settings import (
    DEFAULT_EXPIRATION_DEFAULT,
    MAX_EXPIRATION_DEFAULT,
    TokenSettings,
)


class TestTokenSettings:
    """Tests for TokenSettings."""

    def test_defaults(self) -> None:
        settings = TokenSettings()
        assert settings.default_expiration == DEFAULT_EXPIRATION_DEFAULT
        assert settings.max_expiration == MAX_EXPIRATION_DEFAULT
        assert settings.id_length == 10
        assert settings.time_tolerance == 0
        assert settings.log_level == "WARNING"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AMTT_DEFAULT_EXPIRATION", "3600")
        monkeypatch.setenv("AMTT_LOG_LEVEL", "debug")
        settings = TokenSettings()
        assert settings.default_expiration == 3600
        assert settings.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AMTT_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            TokenSettings()
