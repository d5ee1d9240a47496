"""Tests for the invocation context builder."""

import itertools

from lambda_runtime_client.invocation_context import (
    InvocationContext,
    build_invocation_context,
    now_ms,
)
from lambda_runtime_client.models import Invocation


def _make_invocation(**overrides):
    defaults = {
        "request_id": "req-1",
        "deadline_ms": 10_000,
        "invoked_function_arn": "arn:aws:lambda:us-east-1:123456789012:function:test-function",
    }
    defaults.update(overrides)
    return Invocation(**defaults)


class TestBuildInvocationContext:
    def test_copies_request_id(self, settings):
        context = build_invocation_context(_make_invocation(), settings)
        assert context.aws_request_id == "req-1"

    def test_copies_function_metadata(self, settings):
        context = build_invocation_context(_make_invocation(), settings)
        assert context.function_name == "test-function"
        assert context.function_version == "7"
        assert context.memory_limit_in_mb == "512"

    def test_copies_invocation_headers(self, settings):
        invocation = _make_invocation(client_context={"env": {}}, cognito_identity={"id": "x"})
        context = build_invocation_context(invocation, settings)
        assert context.invoked_function_arn.endswith(":function:test-function")
        assert context.client_context == {"env": {}}
        assert context.identity == {"id": "x"}

    def test_remaining_time_uses_clock(self, settings):
        context = build_invocation_context(_make_invocation(), settings, clock=lambda: 7_500)
        assert context.get_remaining_time_in_millis() == 2_500

    def test_remaining_time_recomputed_on_every_call(self, settings):
        ticks = itertools.count(start=1_000, step=250)
        context = build_invocation_context(_make_invocation(), settings, clock=lambda: next(ticks))
        values = [context.get_remaining_time_in_millis() for _ in range(5)]
        assert values == [9_000, 8_750, 8_500, 8_250, 8_000]

    def test_remaining_time_non_increasing_with_real_clock(self, settings):
        invocation = _make_invocation(deadline_ms=now_ms() + 60_000)
        context = build_invocation_context(invocation, settings)
        values = [context.get_remaining_time_in_millis() for _ in range(20)]
        assert values == sorted(values, reverse=True)

    def test_remaining_time_negative_after_deadline(self, settings):
        context = build_invocation_context(_make_invocation(), settings, clock=lambda: 12_000)
        assert context.get_remaining_time_in_millis() == -2_000


class TestInvocationContext:
    def test_defaults(self):
        context = InvocationContext(aws_request_id="req-1", deadline_ms=0)
        assert context.function_name == ""
        assert context.identity is None

    def test_now_ms_is_epoch_milliseconds(self):
        assert now_ms() > 1_600_000_000_000
