"""Pytest fixtures for tests."""

import json

import pytest

from ledbridge.core import HardwareBridge
from ledbridge.exceptions import TransportConnectError, TransportSendError
from ledbridge.models import BridgeConfig, ConnectionState

TEST_URL = "ws://test-board:8080"


class FakeTransport:
    """In-memory transport driven by the test instead of a socket thread."""

    def __init__(self, url: str, auto_open: bool = False):
        self.url = url
        self.auto_open = auto_open
        self.state = ConnectionState.CLOSED
        self.sent: list[str] = []
        self.inbound: list[str] = []
        self.fail_sends = False
        self.started = False
        self.closed = False

    @property
    def ready_state(self) -> ConnectionState:
        return self.state

    def start(self) -> None:
        self.started = True
        self.state = ConnectionState.OPEN if self.auto_open else ConnectionState.CONNECTING

    def send(self, message: str) -> None:
        if self.fail_sends or self.state != ConnectionState.OPEN:
            raise TransportSendError(self.url, "fake send failure")
        self.sent.append(message)

    def receive(self) -> list[str]:
        messages, self.inbound = self.inbound, []
        return messages

    def close(self) -> None:
        self.closed = True
        self.state = ConnectionState.CLOSED

    # Test controls

    def open(self) -> None:
        self.state = ConnectionState.OPEN

    def drop(self) -> None:
        self.state = ConnectionState.CLOSED

    def sent_json(self) -> list[dict]:
        return [json.loads(message) for message in self.sent]


class FakeTransportFactory:
    """Records every transport the connection manager builds."""

    def __init__(self, auto_open: bool = False, fail_start: bool = False):
        self.auto_open = auto_open
        self.fail_start = fail_start
        self.created: list[FakeTransport] = []

    def __call__(self, url: str) -> FakeTransport:
        if self.fail_start:
            raise TransportConnectError(url, "fake refusal")
        transport = FakeTransport(url, auto_open=self.auto_open)
        self.created.append(transport)
        return transport

    @property
    def last(self) -> FakeTransport:
        return self.created[-1]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture(autouse=True)
def no_env_url(monkeypatch):
    """Keep a developer's LED_BOARD_URL out of the tests."""
    monkeypatch.delenv("LED_BOARD_URL", raising=False)


@pytest.fixture
def config():
    """Bridge config pointing at a fake board."""
    return BridgeConfig(led_board_url=TEST_URL)


@pytest.fixture
def transport_factory():
    return FakeTransportFactory()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bridge(config, transport_factory, clock):
    """Bridge wired to fake transport and clock, not connected."""
    return HardwareBridge(config, transport_factory=transport_factory, clock=clock)


@pytest.fixture
def connected_bridge(bridge, transport_factory, clock):
    """Bridge with an open link and the connect-time traffic already flushed."""
    bridge.connect()
    transport_factory.last.open()
    bridge.tick()
    clock.advance(1.0)
    transport_factory.last.sent.clear()
    return bridge
