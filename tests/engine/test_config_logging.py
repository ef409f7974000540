"""Tests for settings and structured logging."""

import logging

import structlog
from structlog.testing import capture_logs

from core.config import Settings, get_settings
from core.logging import (
    LoggerRegistry,
    _add_service_info,
    _censor_sensitive_keys,
    bind_context,
    clear_context,
    configure_logging,
    schema_logger,
    unbind_context,
    validation_logger,
)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.VALIDATION_MAX_ERRORS == 50
        assert settings.VALIDATION_ABORT_EARLY is False
        assert settings.AVATAR_MAX_BYTES == 5 * 1024 * 1024
        assert "image/png" in settings.AVATAR_ALLOWED_MIME_TYPES
        assert settings.PROFILE_BIO_MAX_LENGTH == 500

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("VALIDATION_MAX_ERRORS", "5")
        monkeypatch.setenv("VALIDATION_ABORT_EARLY", "true")
        settings = Settings(_env_file=None)
        assert settings.VALIDATION_MAX_ERRORS == 5
        assert settings.VALIDATION_ABORT_EARLY is True

    def test_cached(self) -> None:
        assert get_settings() is get_settings()


class TestProcessors:
    def test_censors_sensitive_keys(self) -> None:
        event = {"event": "login", "password": "Secret1", "payload": {"newPassword": "x", "name": "Ana"}}
        censored = _censor_sensitive_keys(None, "info", event)
        assert censored["password"] == "[REDACTED]"
        assert censored["payload"] == {"newPassword": "[REDACTED]", "name": "Ana"}

    def test_censors_inside_lists(self) -> None:
        censored = _censor_sensitive_keys(None, "info", {"items": [{"token": "t"}]})
        assert censored["items"] == [{"token": "[REDACTED]"}]

    def test_service_info(self) -> None:
        event = _add_service_info(None, "info", {"event": "x"})
        assert event["service"] == "academia-validation"
        assert "version" in event


class TestLoggers:
    def test_registry_reuses_loggers(self) -> None:
        assert LoggerRegistry.get("validation") is validation_logger()
        assert schema_logger() is not validation_logger()

    def test_context_binding(self) -> None:
        bind_context(request_id="r-1", entity="career")
        try:
            assert structlog.contextvars.get_contextvars() == {"request_id": "r-1", "entity": "career"}
            unbind_context("entity")
            assert structlog.contextvars.get_contextvars() == {"request_id": "r-1"}
        finally:
            clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_configure_logging(self, restore_logging) -> None:
        configure_logging(level="DEBUG", json_logs=True)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_rejection_is_logged(self) -> None:
        from entity_validators import get_validator

        with capture_logs() as logs:
            get_validator("career").validate_create({})
        events = [e for e in logs if e["event"] == "validation_failed"]
        assert events[0]["schema"] == "career.create"
        assert events[0]["error_count"] == 5
