"""Tests for logging processors, request context and settings."""

import logging

import pytest
import structlog

from mflix_store.config.settings import Settings
from mflix_store.core.context import (
    RequestContext,
    clear_context,
    get_context,
    get_request_id,
    set_request_id,
    set_user_id,
)
from mflix_store.core.database.base import StoreConfig
from mflix_store.core.logging import (
    add_context_processor,
    configure_structlog,
    filter_sensitive_data,
)


@pytest.fixture(autouse=True)
def _clean_context():
    clear_context()
    yield
    clear_context()


class TestFilterSensitiveData:
    def test_masks_tokens_and_hashes(self):
        event = filter_sensitive_data(
            None,
            "info",
            {"event": "session_created", "jwt": "eyJhbGciOi", "password_hash": "$argon"},
        )

        assert event["event"] == "session_created"
        assert event["jwt"] == "ey******Oi"
        assert event["password_hash"] == "$a**on"

    def test_short_values_are_fully_masked(self):
        event = filter_sensitive_data(None, "info", {"token": "abc"})

        assert event["token"] == "***"

    def test_nested_dicts(self):
        event = filter_sensitive_data(
            None, "info", {"user": {"email": "a@x.com", "password": "hunter22"}}
        )

        assert event["user"] == {"email": "a@x.com", "password": "hu****22"}


class TestConfigureStructlog:
    def test_file_handlers_and_driver_level(self, tmp_path):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_structlog(
                Settings(_env_file=None, log_format="json"), log_dir=tmp_path
            )

            assert (tmp_path / "mflix-store.log").exists()
            assert (tmp_path / "mflix-store.error.log").exists()
            assert logging.getLogger("cassandra").level == logging.WARNING
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            structlog.reset_defaults()


class TestRequestContext:
    def test_context_is_added_to_events(self):
        set_request_id("req-1")
        set_user_id("a@x.com")

        event = add_context_processor(None, "info", {"event": "x"})

        assert event == {"event": "x", "request_id": "req-1", "user_id": "a@x.com"}

    def test_empty_context(self):
        assert get_context() == {}

    def test_context_manager_restores_values(self):
        set_request_id("outer")

        with RequestContext(request_id="inner", user_id="a@x.com"):
            assert get_context() == {"request_id": "inner", "user_id": "a@x.com"}

        assert get_context() == {"request_id": "outer"}

    def test_generates_request_id(self):
        with RequestContext():
            assert get_request_id()


class TestSettings:
    def test_store_config_from_settings(self):
        settings = Settings(
            _env_file=None,
            cassandra_keyspace="catalog",
            cassandra_write_consistency="LOCAL_QUORUM",
            cassandra_serial_consistency="LOCAL_SERIAL",
            leaderboard_size=5,
            cassandra_request_timeout=3.0,
        )

        config = StoreConfig.from_settings(settings)

        assert config.keyspace == "catalog"
        assert config.write_consistency == "LOCAL_QUORUM"
        assert config.serial_consistency == "LOCAL_SERIAL"
        assert config.leaderboard_size == 5
        assert config.request_timeout == 3.0

    def test_environment_flags(self):
        settings = Settings(_env_file=None, environment="production")

        assert settings.is_production
        assert not settings.is_development

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("LEADERBOARD_CONSISTENCY", "ALL")

        assert Settings(_env_file=None).leaderboard_consistency == "ALL"

    def test_store_config_is_frozen(self):
        config = StoreConfig(keyspace="k")

        with pytest.raises(ValueError):
            config.keyspace = "other"
