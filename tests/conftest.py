"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest
import requests

from lambda_runtime_client.config import RuntimeSettings, get_settings
from lambda_runtime_client.logging.config import get_logging_config
from lambda_runtime_client.logging.context import clear_context
from tests.http_fakes import make_http_response


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "AWS_LAMBDA_RUNTIME_API",
        "_HANDLER",
        "HANDLER",
        "LAMBDA_TASK_ROOT",
        "AWS_LAMBDA_FUNCTION_NAME",
        "AWS_LAMBDA_FUNCTION_VERSION",
        "AWS_LAMBDA_FUNCTION_MEMORY_SIZE",
        "AWS_LAMBDA_LOG_GROUP_NAME",
        "AWS_LAMBDA_LOG_STREAM_NAME",
        "RESPONSE_TIMEOUT_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "AWS_LAMBDA_LOG_LEVEL",
        "AWS_LAMBDA_LOG_FORMAT",
        "INCLUDE_LOCATION",
        "_X_AMZN_TRACE_ID",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_logging_config.cache_clear()
    clear_context()


@pytest.fixture()
def settings():
    """Runtime settings pointing at a fake Runtime API."""
    return RuntimeSettings(
        aws_lambda_runtime_api="127.0.0.1:9001",
        handler="app.handler",
        aws_lambda_function_name="test-function",
        aws_lambda_function_version="7",
        aws_lambda_function_memory_size="512",
    )


@pytest.fixture()
def session():
    """Mock requests.Session whose requests succeed with an empty 202."""
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_http_response(status_code=202)
    return mock_session
