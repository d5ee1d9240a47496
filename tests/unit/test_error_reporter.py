"""Tests for the error reporter."""

import logging
from unittest.mock import MagicMock

import pytest

from lambda_runtime_client.error_reporter import ErrorReporter
from lambda_runtime_client.exceptions.init_errors import HandlerNotFound
from lambda_runtime_client.exceptions.invocation_errors import EnvelopeError, TransportError
from lambda_runtime_client.models import ErrorReport
from lambda_runtime_client.runtime_api import RuntimeApiClient


@pytest.fixture()
def api():
    return MagicMock(spec=RuntimeApiClient)


class TestReportInitError:
    def test_posts_to_init_endpoint(self, api):
        report = ErrorReporter(api).report_init_error(HandlerNotFound("Handler function not found: go"))
        api.post_init_error.assert_called_once_with(report)
        api.post_invocation_error.assert_not_called()
        assert report.error_type == "Runtime.HandlerNotFound"
        assert report.error_message == "Handler function not found: go"

    def test_transport_failure_propagates(self, api):
        api.post_init_error.side_effect = TransportError("down")
        with pytest.raises(TransportError):
            ErrorReporter(api).report_init_error(HandlerNotFound("missing"))


class TestReportInvocationError:
    def test_builds_report_from_exception(self, api):
        report = ErrorReporter(api).report_invocation_error("req-1", ValueError("boom"))
        api.post_invocation_error.assert_called_once_with("req-1", report)
        assert report.error_type == "ValueError"
        assert report.error_message == "boom"

    def test_posts_existing_report_unchanged(self, api):
        existing = ErrorReport(error_type="E", error_message="m", stack_trace=["x"])
        report = ErrorReporter(api).report_invocation_error("req-2", existing)
        assert report is existing
        api.post_invocation_error.assert_called_once_with("req-2", existing)

    def test_fresh_report_per_failure(self, api):
        reporter = ErrorReporter(api)
        error = ValueError("same")
        assert reporter.report_invocation_error("a", error) is not reporter.report_invocation_error("b", error)


class TestLogUnreportableError:
    def test_logs_without_posting(self, api, caplog):
        with caplog.at_level(logging.ERROR, logger="lambda_runtime_client.error_reporter"):
            ErrorReporter(api).log_unreportable_error(EnvelopeError("no request id"))
        assert "no request id" in caplog.text
        api.post_init_error.assert_not_called()
        api.post_invocation_error.assert_not_called()

    def test_logs_event_body_of_malformed_envelope(self, api, caplog):
        error = EnvelopeError("Next invocation has no request id", body=b'{"orderId": 7}')
        with caplog.at_level(logging.ERROR, logger="lambda_runtime_client.error_reporter"):
            ErrorReporter(api).log_unreportable_error(error)
        record = caplog.records[-1]
        assert record.event == '{"orderId": 7}'
        assert record.error_code == "Runtime.EnvelopeError"

    def test_logs_transport_details(self, api, caplog):
        error = TransportError("refused", url="http://host/next", status_code=503)
        with caplog.at_level(logging.ERROR, logger="lambda_runtime_client.error_reporter"):
            ErrorReporter(api).log_unreportable_error(error)
        record = caplog.records[-1]
        assert record.url == "http://host/next"
        assert record.status_code == 503
