"""Runtime entry point.

``serve`` (the default) is the container entry point: it loads settings,
resolves the handler once, and runs the invocation loop until SIGTERM or
SIGINT. ``invoke-local`` runs a handler once against an event without a
Runtime API and prints the result to stdout, with logs on stderr.

Usage:
    python -m lambda_runtime_client.main
    python -m lambda_runtime_client.main invoke-local app.handler --data '{"a": 1}'
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from lambda_runtime_client.config import get_settings
from lambda_runtime_client.error_reporter import ErrorReporter
from lambda_runtime_client.exceptions.init_errors import InitError
from lambda_runtime_client.exceptions.invocation_errors import RuntimeApiError
from lambda_runtime_client.handler_loader import load_handler, parse_handler_string
from lambda_runtime_client.invocation_context import InvocationContext, now_ms
from lambda_runtime_client.logging.logger import setup_logging
from lambda_runtime_client.runtime_api import RuntimeApiClient
from lambda_runtime_client.runtime_client import RuntimeClient, invoke_handler

if TYPE_CHECKING:
    from collections.abc import Sequence

    import requests

    from lambda_runtime_client.config import RuntimeSettings
    from lambda_runtime_client.types import Handler

logger = logging.getLogger(__name__)

INIT_FAILURE_EXIT_CODE = 1
LOCAL_INVOKE_TIMEOUT_MS = 900_000


def initialize_handler(settings: RuntimeSettings, api: RuntimeApiClient) -> Handler:
    """Resolve the handler, or report the init error and exit.

    Args:
        settings: Runtime settings holding the handler string.
        api: Runtime API client used to report an init failure.

    Returns:
        The resolved handler.

    Raises:
        SystemExit: With a non-zero status if the handler cannot be resolved.
    """
    try:
        module_path, export_name = parse_handler_string(settings.handler)
        return load_handler(module_path, export_name, settings.lambda_task_root)
    except InitError as error:
        try:
            ErrorReporter(api).report_init_error(error)
        except RuntimeApiError:
            logger.exception("Failed to report init error")
        logger.critical("Handler could not be loaded, exiting")
        sys.exit(INIT_FAILURE_EXIT_CODE)


def create_runtime_client(
    settings: RuntimeSettings,
    *,
    session: requests.Session | None = None,
) -> RuntimeClient:
    """Create the Runtime API client, resolve the handler and build the loop.

    Args:
        settings: Runtime settings.
        session: Optional HTTP session for the Runtime API.

    Returns:
        A RuntimeClient ready to run.
    """
    api = RuntimeApiClient(
        settings.runtime_api_base_url,
        session=session,
        timeout_seconds=settings.response_timeout_seconds,
    )
    handler = initialize_handler(settings, api)
    return RuntimeClient(handler, api, settings)


def serve() -> int:
    """Run the invocation loop until a shutdown signal arrives."""
    settings = get_settings()
    setup_logging()

    client = create_runtime_client(settings)

    def signal_handler(signal_number: int, _frame: object) -> None:
        logger.info("Received signal %d", signal_number)
        client.stop()

    for signal_name in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signal_name, signal_handler)

    client.run()
    return 0


def invoke_local(
    handler_string: str,
    event_json: str = "{}",
    *,
    task_root: str | None = None,
    function_name: str = "local",
) -> int:
    """Invoke a handler once without a Runtime API and print its result.

    Args:
        handler_string: Handler in ``module.function`` form.
        event_json: JSON-encoded event.
        task_root: Directory holding the handler code.
        function_name: Function name placed in the context.

    Returns:
        Exit code: 0 on success, 1 on any failure.
    """
    try:
        module_path, export_name = parse_handler_string(handler_string)
        handler = load_handler(module_path, export_name, task_root)
        event = json.loads(event_json)
    except (InitError, json.JSONDecodeError):
        logger.exception("Local invoke setup failed")
        return 1

    started_ms = now_ms()
    context = InvocationContext(
        aws_request_id=f"local-{started_ms}",
        deadline_ms=started_ms + LOCAL_INVOKE_TIMEOUT_MS,
        function_name=function_name,
    )
    outcome = invoke_handler(handler, event, context)

    if outcome.error is not None:
        print(json.dumps(outcome.error.to_payload(), indent=2))  # noqa: T201
        return 1

    print(json.dumps(outcome.result, indent=2, default=str))  # noqa: T201
    return 0


def _read_event(arguments: argparse.Namespace) -> str:
    """Return the event JSON from --path, --data or the empty object."""
    if arguments.path:
        return Path(arguments.path).read_text(encoding="utf-8")
    return arguments.data


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lambda-runtime-client")
    subcommands = parser.add_subparsers(dest="command")

    subcommands.add_parser("serve", help="Poll the Runtime API and run the handler (default)")

    local = subcommands.add_parser("invoke-local", help="Invoke a handler once and print its result")
    local.add_argument("handler", help="Handler in module.function form")
    source = local.add_mutually_exclusive_group()
    source.add_argument("--data", default="{}", help="Event as a JSON string")
    source.add_argument("--path", help="Path to a JSON event file")
    local.add_argument("--task-root", default=".", help="Directory holding the handler code")
    local.add_argument("--function-name", default="local", help="Function name placed in the context")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code.
    """
    arguments = _build_parser().parse_args(argv)

    if arguments.command == "invoke-local":
        setup_logging(stream=sys.stderr)
        return invoke_local(
            arguments.handler,
            _read_event(arguments),
            task_root=arguments.task_root,
            function_name=arguments.function_name,
        )
    return serve()


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
