"""Tests for the ConnectionManager state machine."""

import json

import pytest

from ledbridge.core import CommandQueue, ConnectionManager
from ledbridge.models import BridgeConfig, ConnectionState
from ledbridge.protocols import ConnectionEvent
from ledbridge.wire import ClearCommand, UpdateCommand

from conftest import TEST_URL, FakeTransportFactory


@pytest.fixture
def queue():
    return CommandQueue()


@pytest.fixture
def manager(config, queue, transport_factory):
    return ConnectionManager(config, queue, transport_factory)


def events_of(pending):
    return [event for event, _ in pending]


@pytest.mark.unit
class TestConnect:
    """Test manual connection attempts."""

    def test_initial_state(self, manager):
        assert manager.state == ConnectionState.CLOSED
        assert not manager.is_open
        assert manager.reconnect_attempts == 0
        assert manager.max_reconnect_attempts == 10

    def test_connect_starts_attempt(self, manager, transport_factory):
        assert manager.connect(0.0)
        assert manager.state == ConnectionState.CONNECTING
        assert transport_factory.last.url == TEST_URL
        assert transport_factory.last.started

    def test_connect_while_connecting_is_rejected(self, manager, transport_factory):
        manager.connect(0.0)
        assert not manager.connect(0.1)
        assert len(transport_factory.created) == 1

    def test_connect_while_open_is_noop(self, manager, transport_factory):
        manager.connect(0.0)
        transport_factory.last.open()
        manager.poll(0.1)

        assert manager.connect(0.2)
        assert len(transport_factory.created) == 1

    def test_start_failure_leaves_closed(self, config, queue):
        manager = ConnectionManager(config, queue, FakeTransportFactory(fail_start=True))
        assert not manager.connect(0.0)
        assert manager.state == ConnectionState.CLOSED

    def test_send_requires_open_link(self, manager):
        assert not manager.send('{"cmd":"update"}')


@pytest.mark.unit
class TestOpen:
    """Test the CONNECTING → OPEN transition."""

    def test_open_sends_config_and_queues_reset(self, manager, queue, transport_factory):
        manager.connect(0.0)
        transport_factory.last.open()

        events = manager.poll(0.1)

        assert events_of(events) == [ConnectionEvent.CONNECTED]
        assert manager.is_open
        assert transport_factory.last.sent_json() == [
            {"cmd": "config", "width": 16, "height": 11, "fps": 60, "brightness": 128}
        ]
        assert queue.peek_all() == [ClearCommand(), UpdateCommand()]

    def test_config_uses_settings(self, queue, transport_factory):
        config = BridgeConfig(led_board_url=TEST_URL, brightness=40, hardware_fps=30)
        manager = ConnectionManager(config, queue, transport_factory)
        manager.connect(0.0)
        transport_factory.last.open()
        manager.poll(0.1)

        sent = json.loads(transport_factory.last.sent[0])
        assert sent["brightness"] == 40
        assert sent["fps"] == 30

    def test_hardware_error_message(self, manager, transport_factory):
        manager.connect(0.0)
        transport_factory.last.open()
        manager.poll(0.1)

        transport_factory.last.inbound = [
            '{"status": "error", "message": "buffer overflow"}',
            "garbage",
            '{"status": "ok"}',
        ]
        events = manager.poll(0.2)

        assert events == [(ConnectionEvent.HARDWARE_ERROR, "buffer overflow")]


@pytest.mark.unit
class TestReconnect:
    """Test connection loss and the reconnection policy."""

    def open_link(self, manager, transport_factory, now=0.0):
        manager.connect(now)
        transport_factory.last.open()
        manager.poll(now)

    def test_connection_lost(self, manager, transport_factory):
        self.open_link(manager, transport_factory)
        transport_factory.last.drop()

        events = manager.poll(1.0)

        assert events_of(events) == [ConnectionEvent.DISCONNECTED]
        assert manager.state == ConnectionState.CLOSED
        assert not manager.has_transport

    def test_connection_lost_through_closing(self, manager, transport_factory):
        """A link that reports CLOSING before CLOSED is still a loss."""
        self.open_link(manager, transport_factory)
        transport_factory.last.state = ConnectionState.CLOSING
        assert manager.poll(1.0) == []
        assert manager.state == ConnectionState.CLOSING

        transport_factory.last.state = ConnectionState.CLOSED
        events = manager.poll(2.0)

        assert events_of(events) == [ConnectionEvent.DISCONNECTED]
        assert manager.state == ConnectionState.CLOSED
        assert not manager.has_transport

        # Backoff runs from the loss, not from the last successful connect
        manager.poll(2.5)
        manager.poll(6.5)
        assert len(transport_factory.created) == 1
        assert manager.reconnect_attempts == 0

        manager.poll(7.0)
        assert len(transport_factory.created) == 2
        assert manager.reconnect_attempts == 1

    def test_closing_during_connect_is_a_failed_attempt(self, manager, transport_factory):
        manager.connect(0.0)
        transport_factory.last.state = ConnectionState.CLOSING
        manager.poll(0.1)
        transport_factory.last.state = ConnectionState.CLOSED

        events = manager.poll(0.2)

        assert events_of(events) == [ConnectionEvent.CONNECT_FAILED]

    def test_reconnect_waits_for_interval(self, manager, transport_factory):
        self.open_link(manager, transport_factory)
        transport_factory.last.drop()
        manager.poll(1.0)

        manager.poll(5.9)
        assert len(transport_factory.created) == 1

        manager.poll(6.0)
        assert len(transport_factory.created) == 2
        assert manager.reconnect_attempts == 1
        assert manager.state == ConnectionState.CONNECTING

    def test_successful_reconnect_resets_attempts(self, manager, transport_factory):
        self.open_link(manager, transport_factory)
        transport_factory.last.drop()
        manager.poll(1.0)
        manager.poll(6.0)

        transport_factory.last.open()
        events = manager.poll(6.1)

        assert events_of(events) == [ConnectionEvent.CONNECTED]
        assert manager.reconnect_attempts == 0

    def test_reconnect_cap(self, manager, transport_factory):
        """After max consecutive failures nothing reconnects on its own."""
        manager.connect(0.0)
        now = 0.0
        all_events = []

        for _ in range(40):
            transport_factory.last.drop()
            now += 5.0
            all_events.extend(events_of(manager.poll(now)))

        assert manager.reconnect_attempts == 10
        assert manager.reconnect_exhausted
        # one manual attempt plus ten automatic ones
        assert len(transport_factory.created) == 11
        assert all_events.count(ConnectionEvent.RECONNECT_EXHAUSTED) == 1
        assert all_events.count(ConnectionEvent.CONNECT_FAILED) == 11

    def test_manual_connect_after_exhaustion(self, manager, transport_factory):
        manager.connect(0.0)
        now = 0.0
        for _ in range(40):
            transport_factory.last.drop()
            now += 5.0
            manager.poll(now)

        assert manager.connect(now)
        assert manager.reconnect_attempts == 0
        assert len(transport_factory.created) == 12

    def test_start_failures_count_as_attempts(self, config, queue):
        factory = FakeTransportFactory(fail_start=True)
        manager = ConnectionManager(config, queue, factory)
        manager.connect(0.0)

        now = 0.0
        for _ in range(20):
            now += 5.0
            manager.poll(now)

        assert manager.reconnect_attempts == 10

    def test_no_auto_reconnect_when_disabled(self, queue, transport_factory):
        config = BridgeConfig(led_board_url=TEST_URL, auto_reconnect=False)
        manager = ConnectionManager(config, queue, transport_factory)
        manager.connect(0.0)
        transport_factory.last.drop()

        manager.poll(1.0)
        manager.poll(60.0)

        assert len(transport_factory.created) == 1

    def test_close_stops_reconnecting(self, manager, transport_factory):
        self.open_link(manager, transport_factory)
        transport = transport_factory.last

        manager.close()
        manager.poll(100.0)

        assert transport.closed
        assert manager.state == ConnectionState.CLOSED
        assert len(transport_factory.created) == 1
