# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ModelMongohatSettings and ModelMongohatOptions."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from mongohat.models import ModelMongohatOptions, ModelMongohatSettings
from mongohat.models.model_mongohat_settings import (
    DEFAULT_LAUNCH_TIMEOUT_SECONDS,
    DEFAULT_PORT_SCAN_SPAN,
    DEFAULT_STOP_GRACE_PERIOD_SECONDS,
)

_ENV_VARS = (
    "MONGOHAT_BASE_DIR",
    "MONGOHAT_MONGOD_BINARY",
    "MONGOHAT_BIND_HOST",
    "MONGOHAT_LAUNCH_TIMEOUT",
    "MONGOHAT_STOP_GRACE_PERIOD",
    "MONGOHAT_PORT_SCAN_SPAN",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsFromEnvironment:
    """Tests for ModelMongohatSettings.from_environment()."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = ModelMongohatSettings.from_environment()
        assert settings.base_directory == Path(tempfile.gettempdir())
        assert settings.mongod_binary is None
        assert settings.bind_host == "127.0.0.1"
        assert settings.launch_timeout_seconds == DEFAULT_LAUNCH_TIMEOUT_SECONDS
        assert settings.stop_grace_period_seconds == DEFAULT_STOP_GRACE_PERIOD_SECONDS
        assert settings.port_scan_span == DEFAULT_PORT_SCAN_SPAN

    def test_overrides(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("MONGOHAT_BASE_DIR", str(tmp_path))
        clean_env.setenv("MONGOHAT_MONGOD_BINARY", "/opt/mongo/bin/mongod")
        clean_env.setenv("MONGOHAT_BIND_HOST", "0.0.0.0")
        clean_env.setenv("MONGOHAT_LAUNCH_TIMEOUT", "30")
        clean_env.setenv("MONGOHAT_STOP_GRACE_PERIOD", "0")
        clean_env.setenv("MONGOHAT_PORT_SCAN_SPAN", "50")

        settings = ModelMongohatSettings.from_environment()

        assert settings.base_directory == tmp_path
        assert settings.mongod_binary == "/opt/mongo/bin/mongod"
        assert settings.bind_host == "0.0.0.0"
        assert settings.launch_timeout_seconds == 30.0
        assert settings.stop_grace_period_seconds == 0.0
        assert settings.port_scan_span == 50

    def test_invalid_values_fall_back(self, clean_env: pytest.MonkeyPatch) -> None:
        """Malformed values log a warning and keep the default."""
        clean_env.setenv("MONGOHAT_LAUNCH_TIMEOUT", "soon")
        clean_env.setenv("MONGOHAT_PORT_SCAN_SPAN", "0")

        settings = ModelMongohatSettings.from_environment()

        assert settings.launch_timeout_seconds == DEFAULT_LAUNCH_TIMEOUT_SECONDS
        assert settings.port_scan_span == DEFAULT_PORT_SCAN_SPAN

    def test_settings_are_frozen(self) -> None:
        settings = ModelMongohatSettings()
        with pytest.raises(ValidationError):
            settings.bind_host = "localhost"  # type: ignore[misc]


class TestMongohatOptions:
    """Tests for ModelMongohatOptions validation."""

    def test_all_fields_default_to_none(self) -> None:
        options = ModelMongohatOptions()
        assert options.model_dump() == {
            "db_name": None,
            "db_path": None,
            "db_port": None,
            "use_replica_set": None,
            "version": None,
            "replica_set_name": None,
            "replica_member_count": None,
            "storage_engine": None,
        }

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelMongohatOptions(dbPort=27017)  # type: ignore[call-arg]

    @pytest.mark.parametrize("count", [0, 8])
    def test_member_count_bounds(self, count: int) -> None:
        with pytest.raises(ValidationError):
            ModelMongohatOptions(replica_member_count=count)
