"""Unit tests for the instance listener."""

import socket
import threading
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from openat.adapters.instance.listener import (
    InstanceListener,
    open_paths_from_notification,
)
from openat.adapters.instance.protocol import Notification, ProtocolError
from openat.domain.location import OpenPaths
from openat.ports.instance import OPEN_PATHS_METHOD, SocketInUseError


@pytest.fixture
def received() -> list[OpenPaths]:
    return []


@pytest.fixture
def listener(tmp_path: Path, received: list[OpenPaths]) -> InstanceListener:
    """Create an InstanceListener that records payloads."""
    return InstanceListener(socket_path=tmp_path / "test.sock", handler=received.append)


def client_sending(data: bytes) -> MagicMock:
    client = MagicMock(spec=socket.socket)
    client.recv.side_effect = [data, b""]
    return client


class TestOpenPathsFromNotification:
    """Tests for decoding OpenPaths parameters."""

    def test_decodes_folders_and_files(self) -> None:
        notification = Notification(OPEN_PATHS_METHOD, {"folders": ["/w"], "files": ["/w/a.py"]})

        open_paths = open_paths_from_notification(notification)

        assert open_paths == OpenPaths(folders=[Path("/w")], files=[Path("/w/a.py")])

    def test_missing_lists_default_to_empty(self) -> None:
        open_paths = open_paths_from_notification(Notification("OpenPaths", {}))

        assert open_paths.total == 0

    @pytest.mark.parametrize(
        "params",
        [{"files": "/a.py"}, {"folders": [1, 2]}, {"files": None}],
    )
    def test_rejects_malformed_lists(self, params: dict) -> None:
        with pytest.raises(ProtocolError, match="must be a list of strings"):
            open_paths_from_notification(Notification("OpenPaths", params))


class TestHandleClient:
    """Tests for per-connection handling."""

    def test_open_paths_reaches_handler(
        self, listener: InstanceListener, received: list[OpenPaths]
    ) -> None:
        client = client_sending(
            b'{"method": "OpenPaths", "params": {"folders": [], "files": ["/a.py"]}}\n'
        )

        listener.handle_client(client)

        assert received == [OpenPaths(folders=[], files=[Path("/a.py")])]
        assert listener.messages_received == 1
        client.close.assert_called_once()

    def test_unknown_method_is_ignored(
        self,
        listener: InstanceListener,
        received: list[OpenPaths],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        listener.handle_client(client_sending(b'{"method": "Shutdown"}\n'))

        assert received == []
        assert listener.messages_received == 0
        assert "Ignoring unknown notification: Shutdown" in caplog.text

    def test_protocol_error_is_logged_not_raised(
        self,
        listener: InstanceListener,
        received: list[OpenPaths],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        client = client_sending(b"garbage\n")

        listener.handle_client(client)

        assert received == []
        assert "Protocol error" in caplog.text
        client.close.assert_called_once()


class TestServeForever:
    """Tests for the accept loop."""

    def test_serve_forever_continues_after_timeout(self, listener: InstanceListener) -> None:
        mock_socket = MagicMock(spec=socket.socket)
        call_count = 0

        def accept_side_effect():
            nonlocal call_count
            call_count += 1
            if call_count == 3:
                listener.stop()
            raise TimeoutError("timed out")

        mock_socket.accept.side_effect = accept_side_effect
        listener.server_socket = mock_socket

        listener.serve_forever()

        assert call_count == 3

    def test_serve_forever_stops_after_max_messages(
        self, tmp_path: Path, received: list[OpenPaths]
    ) -> None:
        listener = InstanceListener(
            socket_path=tmp_path / "test.sock", handler=received.append, max_messages=2
        )
        mock_socket = MagicMock(spec=socket.socket)
        mock_socket.accept.side_effect = lambda: (
            client_sending(b'{"method": "OpenPaths", "params": {}}\n'),
            None,
        )
        listener.server_socket = mock_socket

        listener.serve_forever()

        assert len(received) == 2
        assert mock_socket.accept.call_count == 2

    def test_serve_forever_exits_on_socket_error(
        self, listener: InstanceListener, caplog: pytest.LogCaptureFixture
    ) -> None:
        mock_socket = MagicMock(spec=socket.socket)
        mock_socket.accept.side_effect = OSError("bad file descriptor")
        listener.server_socket = mock_socket

        listener.serve_forever()

        assert "Accept failed" in caplog.text


class TestSocketLifecycle:
    """Tests for binding and cleanup."""

    def test_create_socket_removes_stale_socket(self, temp_socket_path: Path) -> None:
        """Test a socket file nobody listens on is replaced."""
        dead = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        dead.bind(str(temp_socket_path))
        dead.close()
        listener = InstanceListener(socket_path=temp_socket_path, handler=lambda p: None)

        try:
            listener.create_socket()

            assert listener.server_socket is not None
            assert temp_socket_path.is_socket()
        finally:
            listener.cleanup()

        assert not temp_socket_path.exists()
        assert listener.server_socket is None

    def test_create_socket_keeps_regular_file(self, temp_socket_path: Path) -> None:
        temp_socket_path.write_text("user data")
        listener = InstanceListener(socket_path=temp_socket_path, handler=lambda p: None)

        with pytest.raises(SocketInUseError, match="is not a socket"):
            listener.run(install_signal_handlers=False)

        assert temp_socket_path.read_text() == "user data"

    def test_create_socket_refuses_live_socket(self, temp_socket_path: Path) -> None:
        """Test a second listener cannot take over a running one."""
        first = InstanceListener(socket_path=temp_socket_path, handler=lambda p: None)
        second = InstanceListener(socket_path=temp_socket_path, handler=lambda p: None)
        first.create_socket()

        try:
            with pytest.raises(SocketInUseError, match="already listening"):
                second.run(install_signal_handlers=False)

            client = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                client.connect(str(temp_socket_path))
            finally:
                client.close()
        finally:
            first.cleanup()

        assert not temp_socket_path.exists()

    def test_cleanup_leaves_replaced_socket(self, temp_socket_path: Path) -> None:
        """Test cleanup does not delete a socket bound by someone else."""
        listener = InstanceListener(socket_path=temp_socket_path, handler=lambda p: None)
        listener.create_socket()
        temp_socket_path.unlink()
        replacement = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        replacement.bind(str(temp_socket_path))

        try:
            listener.cleanup()

            assert temp_socket_path.is_socket()
        finally:
            replacement.close()
            temp_socket_path.unlink()

    def test_cleanup_without_socket_is_safe(self, listener: InstanceListener) -> None:
        listener.cleanup()

        assert not listener.socket_path.exists()


class TestIdleClient:
    """A client that connects and never sends must not wedge the listener."""

    def test_handle_client_drops_silent_client(
        self, listener: InstanceListener, caplog: pytest.LogCaptureFixture
    ) -> None:
        client = MagicMock(spec=socket.socket)
        client.recv.side_effect = TimeoutError("timed out")

        listener.handle_client(client)

        assert "Timed out waiting for message" in caplog.text
        client.close.assert_called_once()

    def test_stop_returns_with_idle_client_connected(
        self, temp_socket_path: Path, received: list[OpenPaths]
    ) -> None:
        listener = InstanceListener(
            socket_path=temp_socket_path,
            handler=received.append,
            poll_interval=0.05,
            read_timeout=0.2,
        )
        thread = threading.Thread(
            target=listener.run, kwargs={"install_signal_handlers": False}, daemon=True
        )
        thread.start()
        deadline = time.monotonic() + 3
        while not (listener.running and temp_socket_path.exists()):
            assert time.monotonic() < deadline, "listener did not start"
            time.sleep(0.01)

        idle = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            idle.connect(str(temp_socket_path))
            time.sleep(0.1)
            listener.stop()
            thread.join(timeout=3)

            assert not thread.is_alive()
        finally:
            idle.close()

        assert received == []
        assert not temp_socket_path.exists()
