"""The invocation loop: poll, invoke, respond or report, repeat.

States:
    INIT -> POLLING -> INVOKING -> RESPONDING -> POLLING
    INVOKING / RESPONDING -> REPORTING_INVOCATION_ERROR -> POLLING
    INIT -> REPORTING_INIT_ERROR -> TERMINAL

Exactly one invocation is in flight at a time. The next poll is only
issued once the previous invocation's response or error has been posted.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import threading
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from lambda_runtime_client.error_reporter import ErrorReporter
from lambda_runtime_client.exceptions.invocation_errors import RuntimeApiError
from lambda_runtime_client.exceptions.reports import create_error_report
from lambda_runtime_client.invocation_context import (
    InvocationContext,
    build_invocation_context,
    now_ms,
)
from lambda_runtime_client.logging.adapters.lambda_adapter import set_invocation_context
from lambda_runtime_client.logging.context import clear_context
from lambda_runtime_client.models import ErrorReport, Invocation, InvocationOutcome, ResponseKind
from lambda_runtime_client.response_formatter import format_response

if TYPE_CHECKING:
    from lambda_runtime_client.config import RuntimeSettings
    from lambda_runtime_client.runtime_api import RuntimeApiClient
    from lambda_runtime_client.types import Clock, Handler, LambdaEvent

logger = logging.getLogger(__name__)

TRACE_ID_ENV_VAR = "_X_AMZN_TRACE_ID"


class RuntimeState(StrEnum):
    """States of the runtime client."""

    INIT = "init"
    POLLING = "polling"
    INVOKING = "invoking"
    RESPONDING = "responding"
    REPORTING_INVOCATION_ERROR = "reporting_invocation_error"
    REPORTING_INIT_ERROR = "reporting_init_error"
    TERMINAL = "terminal"


class IterationResult(StrEnum):
    """How one loop iteration ended."""

    RESPONDED = "responded"
    ERROR_REPORTED = "error_reported"
    POLL_FAILED = "poll_failed"
    REPORT_FAILED = "report_failed"


def invoke_handler(handler: Handler, event: LambdaEvent, context: InvocationContext) -> InvocationOutcome:
    """Invoke a handler once and capture its result or failure.

    Coroutine handlers are driven to completion before returning. A handler
    calling ``sys.exit`` fails the invocation instead of ending the runtime.

    Args:
        handler: The user handler.
        event: The invocation event.
        context: The invocation context.

    Returns:
        The invocation outcome.
    """
    try:
        result = handler(event, context)
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
    except (Exception, SystemExit) as error:
        return InvocationOutcome(error=create_error_report(error))
    return InvocationOutcome(result=result)


class RuntimeClient:
    """Owns the resolved handler and the Runtime API client, and runs the loop."""

    def __init__(
        self,
        handler: Handler,
        api: RuntimeApiClient,
        settings: RuntimeSettings,
        *,
        clock: Clock = now_ms,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the runtime client.

        Args:
            handler: The resolved user handler.
            api: Runtime API client.
            settings: Runtime settings with the function metadata.
            clock: Source of the current epoch time in milliseconds.
            stop_event: Optional signal checked between invocations.
        """
        self._handler = handler
        self._api = api
        self._settings = settings
        self._clock = clock
        self._stop_event = stop_event or threading.Event()
        self._reporter = ErrorReporter(api)
        self._state = RuntimeState.INIT

    @property
    def state(self) -> RuntimeState:
        """Return the current state of the loop."""
        return self._state

    def run(self) -> None:
        """Run the loop until the stop signal is set.

        The signal is only checked before a poll, so an invocation in
        progress always completes and gets its terminal report.
        """
        logger.info("Runtime client started, polling %s", self._api.base_url)
        while not self._stop_event.is_set():
            self.run_once()
        self._state = RuntimeState.TERMINAL
        logger.info("Runtime client stopped")

    def stop(self) -> None:
        """Ask the loop to stop before its next poll."""
        logger.info("Stop requested")
        self._stop_event.set()

    def run_once(self) -> IterationResult:
        """Poll for one invocation and carry it through to its terminal report.

        Returns:
            How the iteration ended.
        """
        self._state = RuntimeState.POLLING
        try:
            invocation = self._api.next_invocation()
        except RuntimeApiError as error:
            self._reporter.log_unreportable_error(error)
            return IterationResult.POLL_FAILED

        try:
            return self._handle_invocation(invocation)
        finally:
            clear_context()
            self._state = RuntimeState.POLLING

    def _handle_invocation(self, invocation: Invocation) -> IterationResult:
        context = build_invocation_context(invocation, self._settings, clock=self._clock)
        set_invocation_context(invocation, context)
        _export_trace_id(invocation.trace_id)
        logger.info(
            "Invocation received",
            extra={"remaining_time_ms": context.get_remaining_time_in_millis()},
        )

        self._state = RuntimeState.INVOKING
        outcome = invoke_handler(self._handler, invocation.event, context)

        report: ErrorReport | None = outcome.error
        if report is None:
            self._state = RuntimeState.RESPONDING
            try:
                self._respond(invocation, outcome.result)
            except Exception as error:
                report = create_error_report(error)
            else:
                return IterationResult.RESPONDED

        self._state = RuntimeState.REPORTING_INVOCATION_ERROR
        try:
            self._reporter.report_invocation_error(invocation.request_id, report)
        except RuntimeApiError as error:
            self._reporter.log_unreportable_error(error)
            return IterationResult.REPORT_FAILED
        return IterationResult.ERROR_REPORTED

    def _respond(self, invocation: Invocation, result: Any) -> None:
        kind, response = format_response(invocation.event, result)
        if kind == ResponseKind.HTTP_SHAPED:
            self._api.post_http_response(invocation.request_id, response)
        else:
            self._api.post_response(invocation.request_id, response)
        logger.info("Invocation succeeded", extra={"response_kind": kind.value})


def _export_trace_id(trace_id: str) -> None:
    """Expose the invocation's trace header to tracing SDKs."""
    if trace_id:
        os.environ[TRACE_ID_ENV_VAR] = trace_id
    else:
        os.environ.pop(TRACE_ID_ENV_VAR, None)
