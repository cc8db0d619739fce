"""Unit tests for exporter settings."""

import pytest
from pydantic import ValidationError

from dovecot_exporter.core.config import Settings


class TestSettings:
    """Tests for settings loading and validation."""

    def test_defaults(self, monkeypatch):
        """Defaults apply when nothing is configured."""
        for name in ("SCOPES", "SOCKET_PATH", "LISTEN_PORT", "TELEMETRY_PATH"):
            monkeypatch.delenv(f"DOVECOT_EXPORTER_{name}", raising=False)

        settings = Settings()

        assert settings.SOCKET_PATH == "/var/run/dovecot/stats"
        assert settings.scope_list == ["user"]
        assert settings.global_scope_set == frozenset({"global"})
        assert settings.LISTEN_PORT == 9199
        assert settings.TELEMETRY_PATH == "/metrics"

    def test_environment_overrides(self, monkeypatch):
        """DOVECOT_EXPORTER_* variables override defaults."""
        monkeypatch.setenv("DOVECOT_EXPORTER_SCOPES", "user, global,,session")
        monkeypatch.setenv("DOVECOT_EXPORTER_LISTEN_PORT", "9100")

        settings = Settings()

        assert settings.scope_list == ["user", "global", "session"]
        assert settings.LISTEN_PORT == 9100

    def test_init_arguments_beat_environment(self, monkeypatch):
        """Explicit arguments win over the environment."""
        monkeypatch.setenv("DOVECOT_EXPORTER_SOCKET_PATH", "/from/env")
        assert Settings(SOCKET_PATH="/from/flag").SOCKET_PATH == "/from/flag"

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_timeout_must_be_positive(self, timeout):
        """Zero or negative timeouts are rejected."""
        with pytest.raises(ValidationError):
            Settings(SOCKET_TIMEOUT=timeout)

    def test_telemetry_path_must_be_absolute(self):
        """Telemetry paths must start with a slash."""
        with pytest.raises(ValidationError):
            Settings(TELEMETRY_PATH="metrics")

    def test_log_level_upper_cased(self):
        """Log level names are normalised to upper case."""
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self):
        """Level names logging does not know are rejected."""
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")
