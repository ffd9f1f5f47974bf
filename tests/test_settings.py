"""Tests for runtime configuration (settings.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from dsjob.exceptions import EnvironmentError
from dsjob.settings import DsjobSettings, load_settings


class TestDefaults:
    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.server is None
        assert settings.password_value() is None
        assert settings.log_level == "WARNING"
        assert settings.encoding == "utf-8"
        assert settings.dsapi_library is None


class TestEnvironment:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DSJOB_DOMAIN", "svc:9080")
        monkeypatch.setenv("DSJOB_USER", "bob")
        monkeypatch.setenv("DSJOB_DSAPI_LIBRARY", "/opt/engine/libvmdsapi.so")
        settings = DsjobSettings()
        assert settings.domain == "svc:9080"
        assert settings.user == "bob"
        assert settings.dsapi_library == "/opt/engine/libvmdsapi.so"

    def test_password_is_secret(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DSJOB_PASSWORD", "hunter2")
        settings = DsjobSettings()
        assert "hunter2" not in repr(settings)
        assert settings.password_value() == "hunter2"

    def test_log_level_is_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DSJOB_LOG_LEVEL", " debug ")
        assert DsjobSettings().log_level == "DEBUG"

    def test_env_file_is_read(self) -> None:
        Path(".env").write_text("DSJOB_SERVER=fromfile\n", encoding="utf-8")
        assert DsjobSettings().server == "fromfile"


class TestValidation:
    def test_invalid_log_level_maps_to_environment_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DSJOB_LOG_LEVEL", "LOUD")
        with pytest.raises(EnvironmentError) as exc_info:
            load_settings()
        assert exc_info.value.hint is not None
