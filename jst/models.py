"""Data models: Endpoint, ProbeOutcome, SpeedTestRun dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class Endpoint:
    """A named block-engine location exposing ``getTipAccounts``.

    Attributes:
        name: Display label (may carry a flag emoji).
        url: Base origin without a trailing path, e.g.
            ``"https://tokyo.mainnet.block-engine.jito.wtf"``.
    """

    name: str
    url: str


@dataclass(frozen=True)
class Success:
    """A probe that got a 2xx response after *elapsed*."""

    elapsed: timedelta


@dataclass(frozen=True)
class Failure:
    """A probe that ended with an error *message*."""

    message: str


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of a single probe against one endpoint.

    ``result`` is either a :class:`Success` or a :class:`Failure`, so an
    outcome always carries exactly one of a latency or an error.  Build
    instances with :meth:`with_success` or :meth:`with_error`.

    Attributes:
        name: Endpoint name.
        url: Endpoint base URL.
        result: The settled probe result.
    """

    name: str
    url: str
    result: Success | Failure

    @classmethod
    def with_success(cls, endpoint: Endpoint, elapsed: timedelta) -> ProbeOutcome:
        return cls(name=endpoint.name, url=endpoint.url, result=Success(elapsed))

    @classmethod
    def with_error(cls, endpoint: Endpoint, message: str) -> ProbeOutcome:
        return cls(name=endpoint.name, url=endpoint.url, result=Failure(message))

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Success)

    @property
    def response_time(self) -> timedelta | None:
        if isinstance(self.result, Success):
            return self.result.elapsed
        return None

    @property
    def error(self) -> str | None:
        if isinstance(self.result, Failure):
            return self.result.message
        return None

    @property
    def latency_ms(self) -> int | None:
        """Elapsed time in whole milliseconds, rounded down."""
        if self.response_time is None:
            return None
        return self.response_time // _ONE_MS


@dataclass
class SpeedTestRun:
    """Everything one invocation of the speed test produced.

    Attributes:
        network: Profile that was measured (``"mainnet"`` / ``"testnet"``).
        outcomes: Collected probe outcomes; their order is unspecified.
        dropped: Names of endpoints whose task failed to complete; they
            have no outcome.
        started_at: When the run started (UTC).
        duration_seconds: Wall-clock duration of the whole batch.
    """

    network: str
    outcomes: list[ProbeOutcome]
    dropped: list[str] = field(default_factory=list)
    started_at: datetime = field(
        default_factory=lambda: datetime.now(UTC),
    )
    duration_seconds: float = 0.0
