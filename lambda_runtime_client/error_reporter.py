"""Reporting of failures to the Runtime API error endpoints."""

import logging

from lambda_runtime_client.exceptions.invocation_errors import RuntimeApiError
from lambda_runtime_client.exceptions.reports import create_error_report
from lambda_runtime_client.models import ErrorReport
from lambda_runtime_client.runtime_api import RuntimeApiClient

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Serializes failures into error reports and posts them.

    Init errors are fatal and the caller must terminate the process after
    reporting. Invocation errors are not: control returns to the loop.
    Failures without a request id have no endpoint and are only logged.
    """

    def __init__(self, api: RuntimeApiClient) -> None:
        """Initialize the error reporter.

        Args:
            api: Runtime API client used to post reports.
        """
        self._api = api

    def report_init_error(self, error: BaseException) -> ErrorReport:
        """Report a failure that happened before the first poll.

        Args:
            error: The initialization failure.

        Returns:
            The report that was posted.

        Raises:
            TransportError: If the report could not be posted.
        """
        report = create_error_report(error)
        logger.error(
            "Init error: %s",
            report.error_message,
            extra={"error_type": report.error_type},
        )
        self._api.post_init_error(report)
        return report

    def report_invocation_error(
        self,
        request_id: str,
        error: BaseException | ErrorReport,
    ) -> ErrorReport:
        """Report a failed invocation.

        Args:
            request_id: Request id of the failed invocation.
            error: The failure, or a report already built from it.

        Returns:
            The report that was posted.

        Raises:
            TransportError: If the report could not be posted.
        """
        report = error if isinstance(error, ErrorReport) else create_error_report(error)
        logger.error(
            "Invocation error: %s",
            report.error_message,
            extra={"error_type": report.error_type},
        )
        self._api.post_invocation_error(request_id, report)
        return report

    def log_unreportable_error(self, error: RuntimeApiError) -> None:
        """Log a failure that happened before a request id was obtained.

        The record carries the error's context, including a truncated copy
        of the event body when the envelope was malformed.

        Args:
            error: The transport or envelope failure.
        """
        logger.error(
            "Runtime API error, polling again: %s",
            error.message,
            exc_info=error,
            extra=error.to_log_dict(),
        )
