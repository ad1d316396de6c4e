"""Tests for WebSocketTransport with the websocket library patched out."""

import threading
from unittest.mock import Mock, patch

import pytest
import websocket

from ledbridge.core import Transport, WebSocketTransport
from ledbridge.exceptions import TransportConnectError, TransportSendError
from ledbridge.models import ConnectionState

URL = "ws://test-board:8080"


@pytest.fixture
def fake_app():
    """A WebSocketApp whose run_forever blocks until close() is called."""
    stopped = threading.Event()
    app = Mock()
    app.run_forever.side_effect = lambda **kwargs: stopped.wait(2.0)
    app.close.side_effect = stopped.set
    with patch("ledbridge.core.transport.websocket.WebSocketApp", return_value=app) as cls:
        yield cls, app


@pytest.mark.unit
class TestWebSocketTransport:
    """Test state publishing and send/receive plumbing."""

    def test_satisfies_protocol(self):
        assert isinstance(WebSocketTransport(URL), Transport)

    def test_lifecycle(self, fake_app):
        cls, app = fake_app
        transport = WebSocketTransport(URL)
        assert transport.ready_state == ConnectionState.CLOSED

        transport.start()
        assert transport.ready_state == ConnectionState.CONNECTING
        assert cls.call_args.args[0] == URL

        transport._on_open(app)
        assert transport.ready_state == ConnectionState.OPEN

        transport.close()
        assert transport.ready_state == ConnectionState.CLOSED
        app.close.assert_called_once()

    def test_tls_verification_off_by_default(self, fake_app):
        _, app = fake_app
        transport = WebSocketTransport("wss://board.local")
        transport.start()
        transport.close()

        sslopt = app.run_forever.call_args.kwargs["sslopt"]
        assert sslopt is not None

    def test_start_twice_fails(self, fake_app):
        transport = WebSocketTransport(URL)
        transport.start()
        try:
            with pytest.raises(TransportConnectError):
                transport.start()
        finally:
            transport.close()

    def test_bad_url_raises_connect_error(self):
        with patch("ledbridge.core.transport.websocket.WebSocketApp", side_effect=ValueError("bad")):
            with pytest.raises(TransportConnectError):
                WebSocketTransport(URL).start()

    def test_send_requires_open(self, fake_app):
        transport = WebSocketTransport(URL)
        with pytest.raises(TransportSendError):
            transport.send('{"cmd":"update"}')

    def test_send_forwards_frame(self, fake_app):
        _, app = fake_app
        transport = WebSocketTransport(URL)
        transport.start()
        transport._on_open(app)

        transport.send('{"cmd":"update"}')

        app.send.assert_called_once_with('{"cmd":"update"}')
        transport.close()

    def test_send_error_wrapped(self, fake_app):
        _, app = fake_app
        app.send.side_effect = websocket.WebSocketConnectionClosedException("gone")
        transport = WebSocketTransport(URL)
        transport.start()
        transport._on_open(app)

        with pytest.raises(TransportSendError):
            transport.send('{"cmd":"update"}')
        transport.close()

    def test_receive_drains_inbound(self):
        transport = WebSocketTransport(URL)
        transport._on_message(None, '{"status":"ok"}')
        transport._on_message(None, b'{"status":"error"}')

        assert transport.receive() == ['{"status":"ok"}', '{"status":"error"}']
        assert transport.receive() == []

    def test_remote_close(self, fake_app):
        _, app = fake_app
        transport = WebSocketTransport(URL)
        transport.start()
        transport._on_open(app)

        transport._on_close(app, 1000, "bye")

        assert transport.ready_state == ConnectionState.CLOSED
        transport.close()
