"""Pytest configuration and standardized factories for glang."""

from collections.abc import Callable
from typing import Any

import pytest

from glang.config.profile import ClientProfile
from glang.exceptions import TransportError
from glang.ratelimit.gate import RateGate
from glang.schemas.ratelimit import GateEvent
from glang.transport.base import BaseTransport


class FakeClock:
    """Deterministic clock whose sleeps advance time instantly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    async def async_sleep(self, seconds: float) -> None:
        self.sleep(seconds)

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransport(BaseTransport):
    """In-memory transport recording calls and replaying queued responses."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.responses: list[Any] = list(responses or [])
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    def call(
        self,
        method: str,
        url: str,
        params: Any | None = None,
        body: Any | None = None,
    ) -> Any:
        self.calls.append({"method": method, "url": url, "params": params, "body": body})
        if not self.responses:
            raise TransportError("No queued response", url=url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_clock() -> FakeClock:
    """Fixture providing a clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def gate_events() -> list[GateEvent]:
    """Collects events emitted by gates built with gate_factory."""
    return []


@pytest.fixture
def gate_factory(
    fake_clock: FakeClock, gate_events: list[GateEvent]
) -> Callable[..., RateGate]:
    """Factory to create RateGate instances driven by the fake clock.

    Returns:
        A callable accepting RateGate keyword overrides.
    """

    def _make_gate(**kwargs: Any) -> RateGate:
        defaults: dict[str, Any] = {
            "character_limit": 100,
            "delay_limit_seconds": 10.0,
            "per_request_delay_seconds": 0.0,
            "poll_interval_seconds": 5.0,
            "clock": fake_clock,
            "sleep": fake_clock.sleep,
            "async_sleep": fake_clock.async_sleep,
            "observers": [gate_events.append],
        }
        return RateGate(**{**defaults, **kwargs})

    return _make_gate


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Fixture providing an empty FakeTransport."""
    return FakeTransport()


@pytest.fixture
def sample_yaml_config() -> str:
    """Provides a sample YAML configuration as a string."""
    return """
rate_gate:
  character_limit: 5000
  delay_limit_seconds: 60
  per_request_delay_seconds: 0.25
transport:
  api_key: test-api-key-123456
  timeout_seconds: 30
"""


@pytest.fixture
def profile_with_key() -> ClientProfile:
    """ClientProfile with an API key and no per-request pause."""
    return ClientProfile().with_overrides(
        {
            "transport.api_key": "test-api-key-123456",
            "rate_gate.per_request_delay_seconds": 0.0,
        }
    )


@pytest.fixture(autouse=True)
def _clear_glang_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials out of the tests."""
    for var in (
        "GLANG_API_KEY",
        "GLANG_ACCESS_TOKEN",
        "GLANG_CHARACTER_LIMIT",
        "GLANG_DELAY_LIMIT",
        "GLANG_RATE_LIMIT",
    ):
        monkeypatch.delenv(var, raising=False)
