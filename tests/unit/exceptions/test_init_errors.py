"""Tests for initialization errors."""

from lambda_runtime_client.exceptions.init_errors import (
    HandlerImportError,
    HandlerNotFound,
    InitError,
)


class TestHandlerNotFound:
    def test_is_init_error(self):
        assert isinstance(HandlerNotFound("missing"), InitError)

    def test_error_code(self):
        assert HandlerNotFound("missing").error_code == "Runtime.HandlerNotFound"

    def test_module_and_export_in_context(self):
        error = HandlerNotFound("missing", module_path="app", export_name="handle")
        assert error.context == {"module_path": "app", "export_name": "handle"}

    def test_no_context_without_details(self):
        assert HandlerNotFound("missing").context == {}


class TestHandlerImportError:
    def test_is_init_error(self):
        assert isinstance(HandlerImportError("broken"), InitError)

    def test_error_code(self):
        assert HandlerImportError("broken").error_code == "Runtime.ImportModuleError"

    def test_module_in_context(self):
        error = HandlerImportError("broken", module_path="app")
        assert error.context["module_path"] == "app"
