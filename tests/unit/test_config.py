"""Tests for runtime configuration."""

import pytest
from pydantic import ValidationError

from lambda_runtime_client.config import RuntimeSettings, get_settings


class TestSettingsDefaults:
    def test_runtime_api_required(self):
        with pytest.raises(ValidationError):
            RuntimeSettings()

    def test_default_task_root(self):
        settings = RuntimeSettings(aws_lambda_runtime_api="localhost:9001")
        assert settings.lambda_task_root == "/var/task"

    def test_default_function_version(self):
        settings = RuntimeSettings(aws_lambda_runtime_api="localhost:9001")
        assert settings.aws_lambda_function_version == "$LATEST"

    def test_default_handler_empty(self):
        settings = RuntimeSettings(aws_lambda_runtime_api="localhost:9001")
        assert settings.handler == ""

    def test_default_response_timeout(self):
        settings = RuntimeSettings(aws_lambda_runtime_api="localhost:9001")
        assert settings.response_timeout_seconds == 30


class TestSettingsFromEnvironment:
    def test_runtime_api(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "10.0.0.1:9001")
        settings = RuntimeSettings()
        assert settings.aws_lambda_runtime_api == "10.0.0.1:9001"

    def test_handler_from_underscore_variable(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "localhost:9001")
        monkeypatch.setenv("_HANDLER", "app.main.handle")
        settings = RuntimeSettings()
        assert settings.handler == "app.main.handle"

    def test_function_metadata(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "localhost:9001")
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "orders")
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_VERSION", "3")
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_MEMORY_SIZE", "1024")
        settings = RuntimeSettings()
        assert settings.aws_lambda_function_name == "orders"
        assert settings.aws_lambda_function_version == "3"
        assert settings.aws_lambda_function_memory_size == "1024"

    def test_strips_whitespace(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "  localhost:9001  ")
        settings = RuntimeSettings()
        assert settings.aws_lambda_runtime_api == "localhost:9001"


class TestSettingsValidation:
    def test_timeout_lower_bound(self):
        with pytest.raises(ValidationError):
            RuntimeSettings(aws_lambda_runtime_api="localhost:9001", response_timeout_seconds=0)

    def test_empty_runtime_api_rejected(self):
        with pytest.raises(ValidationError):
            RuntimeSettings(aws_lambda_runtime_api="")


class TestRuntimeApiBaseUrl:
    def test_base_url(self):
        settings = RuntimeSettings(aws_lambda_runtime_api="127.0.0.1:9001")
        assert settings.runtime_api_base_url == "http://127.0.0.1:9001/2018-06-01/runtime"


class TestGetSettings:
    def test_returns_cached_instance(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "localhost:9001")
        assert get_settings() is get_settings()

    def test_logging_variables_do_not_affect_settings(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "localhost:9001")
        monkeypatch.setenv("LOG_LEVEL", "trace")
        monkeypatch.setenv("AWS_LAMBDA_LOG_LEVEL", "TRACE")
        assert get_settings().aws_lambda_runtime_api == "localhost:9001"
