"""Tests for jst.models dataclasses."""

import dataclasses
from datetime import UTC, datetime, timedelta

import pytest

from jst.models import Endpoint, Failure, ProbeOutcome, SpeedTestRun, Success

_ENDPOINT = Endpoint(name="🇯🇵 Tokyo", url="https://tokyo.mainnet.block-engine.jito.wtf")


class TestEndpoint:
    """Tests for the Endpoint dataclass."""

    def test_fields(self) -> None:
        assert _ENDPOINT.name == "🇯🇵 Tokyo"
        assert _ENDPOINT.url == "https://tokyo.mainnet.block-engine.jito.wtf"

    def test_is_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _ENDPOINT.url = "https://elsewhere.example"  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        other = Endpoint(name="🇯🇵 Tokyo", url="https://tokyo.mainnet.block-engine.jito.wtf")
        assert other == _ENDPOINT


class TestProbeOutcomeSuccess:
    """Outcomes built with with_success()."""

    def test_carries_endpoint_identity(self) -> None:
        outcome = ProbeOutcome.with_success(_ENDPOINT, timedelta(milliseconds=42))
        assert outcome.name == _ENDPOINT.name
        assert outcome.url == _ENDPOINT.url

    def test_latency_present_error_absent(self) -> None:
        outcome = ProbeOutcome.with_success(_ENDPOINT, timedelta(milliseconds=42))
        assert outcome.ok is True
        assert outcome.response_time == timedelta(milliseconds=42)
        assert outcome.error is None
        assert isinstance(outcome.result, Success)

    def test_latency_ms_rounds_down(self) -> None:
        outcome = ProbeOutcome.with_success(_ENDPOINT, timedelta(microseconds=50_999))
        assert outcome.latency_ms == 50

    def test_sub_millisecond_latency_is_zero(self) -> None:
        outcome = ProbeOutcome.with_success(_ENDPOINT, timedelta(microseconds=900))
        assert outcome.latency_ms == 0


class TestProbeOutcomeFailure:
    """Outcomes built with with_error()."""

    def test_error_present_latency_absent(self) -> None:
        outcome = ProbeOutcome.with_error(_ENDPOINT, "HTTP 503")
        assert outcome.ok is False
        assert outcome.error == "HTTP 503"
        assert outcome.response_time is None
        assert outcome.latency_ms is None
        assert isinstance(outcome.result, Failure)

    def test_is_immutable(self) -> None:
        outcome = ProbeOutcome.with_error(_ENDPOINT, "boom")
        with pytest.raises(dataclasses.FrozenInstanceError):
            outcome.result = Success(timedelta(seconds=1))  # type: ignore[misc]


class TestExactlyOneOfLatencyOrError:
    """Every outcome has a latency or an error, never both, never neither."""

    @pytest.mark.parametrize(
        "outcome",
        [
            ProbeOutcome.with_success(_ENDPOINT, timedelta(0)),
            ProbeOutcome.with_success(_ENDPOINT, timedelta(seconds=3)),
            ProbeOutcome.with_error(_ENDPOINT, "HTTP 500"),
            ProbeOutcome.with_error(_ENDPOINT, "connection refused"),
        ],
    )
    def test_xor(self, outcome: ProbeOutcome) -> None:
        assert (outcome.response_time is not None) != (outcome.error is not None)


class TestSpeedTestRun:
    """Tests for the SpeedTestRun dataclass."""

    def test_defaults(self) -> None:
        before = datetime.now(UTC)
        run = SpeedTestRun(network="mainnet", outcomes=[])
        after = datetime.now(UTC)

        assert run.dropped == []
        assert run.duration_seconds == 0.0
        assert run.started_at.tzinfo == UTC
        assert before <= run.started_at <= after

    def test_dropped_defaults_are_distinct(self) -> None:
        r1 = SpeedTestRun(network="mainnet", outcomes=[])
        r2 = SpeedTestRun(network="mainnet", outcomes=[])
        assert r1.dropped is not r2.dropped
