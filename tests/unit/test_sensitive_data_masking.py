import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_email_masked(self):
        from config.structlog_config import mask_sensitive_data

        event_dict = {"event": "test", "to": "alice@example.com"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "alice@example.com" not in result["to"]
        assert "***MASKED***" in result["to"]

    def test_password_masked(self):
        from config.structlog_config import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.structlog_config import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.structlog_config import mask_sensitive_data

        event_dict = {"event": "order.created", "total_price": "30.00"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["total_price"] == "30.00"
        assert result["event"] == "order.created"

    def test_non_string_values_untouched(self):
        from config.structlog_config import mask_sensitive_data

        event_dict = {"event": "test", "user_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["user_id"] == 42


class TestLoggingConfig:
    def test_level_applies_to_root_and_django(self):
        from config.structlog_config import build_logging

        logging_config = build_logging("DEBUG")
        assert logging_config["root"]["level"] == "DEBUG"
        assert logging_config["loggers"]["django"]["level"] == "DEBUG"
        assert logging_config["loggers"]["django.server"]["level"] == "WARNING"

    def test_masking_runs_before_rendering(self):
        from config.structlog_config import SHARED_PROCESSORS, mask_sensitive_data

        assert mask_sensitive_data in SHARED_PROCESSORS
