"""
Tests for logging configuration.
"""
import logging

from conftest import auth_header


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_setup_logging_default_level(self, monkeypatch):
        """Test that setup_logging defaults to INFO level."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        from pizza_service.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("pizza_service")
        assert logger.level == logging.INFO

    def test_setup_logging_respects_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        from pizza_service.logging_config import setup_logging
        setup_logging()

        logger = logging.getLogger("pizza_service")
        assert logger.level == logging.WARNING

    def test_setup_logging_explicit_level(self):
        from pizza_service.logging_config import setup_logging
        setup_logging(level="ERROR")

        logger = logging.getLogger("pizza_service")
        assert logger.level == logging.ERROR

    def test_setup_logging_invalid_level_defaults_to_info(self):
        from pizza_service.logging_config import setup_logging
        setup_logging(level="INVALID_LEVEL")

        logger = logging.getLogger("pizza_service")
        assert logger.level == logging.INFO


class TestNoSensitiveDataInLogs:
    """Passwords and tokens never reach the log output."""

    def test_register_and_login_do_not_log_secrets(self, client, caplog):
        with caplog.at_level(logging.DEBUG, logger="pizza_service"):
            body = client.post(
                "/api/auth",
                json={"name": "secretive", "email": "s@jwt.com", "password": "hunter2-password"},
            ).json()
            client.get("/api/user/me", headers=auth_header(body["token"]))
            client.put("/api/auth", json={"email": "s@jwt.com", "password": "wrong-password"})

        for record in caplog.records:
            message = record.getMessage()
            assert "hunter2-password" not in message
            assert "wrong-password" not in message
            assert body["token"] not in message


class TestRequestIDInLogs:
    def _record(self):
        return logging.LogRecord("pizza_service.test", logging.INFO, __file__, 1, "hello", None, None)

    def test_filter_uses_placeholder_outside_a_request(self):
        from pizza_service.logging_config import RequestIDFilter

        record = self._record()
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "-"

    def test_filter_stamps_current_request_id(self):
        from pizza_service.logging_config import RequestIDFilter, request_id_var

        token = request_id_var.set("order-42")
        try:
            record = self._record()
            RequestIDFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "order-42"

    def test_resolve_level_normalizes_case_and_whitespace(self):
        from pizza_service.logging_config import resolve_level

        assert resolve_level(" debug ") == "DEBUG"
        assert resolve_level("verbose") == "INFO"
