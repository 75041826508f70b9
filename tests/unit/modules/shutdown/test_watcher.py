"""Tests for the shutdown file watcher."""

import threading
import time
from unittest.mock import patch

import pytest

from webjob.modules.shutdown.coordinator import ExitCoordinator
from webjob.modules.shutdown.watcher import ShutdownFileWatcher, WatcherState


@pytest.fixture
def coordinator(mock_logger):
    return ExitCoordinator(mock_logger)


def wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_disabled_without_path(coordinator, mock_logger):
    watcher = ShutdownFileWatcher(None, coordinator, mock_logger)
    
    with patch("threading.Thread") as thread_cls:
        assert watcher.start() is None
    
    assert watcher.state == WatcherState.DISABLED
    thread_cls.assert_not_called()
    assert coordinator.should_exit() is False
    mock_logger.log_info.assert_called_once_with(
        "No shutdown file configured, shutdown file watcher disabled"
    )


def test_existing_file_requests_exit_without_thread(tmp_path, coordinator, mock_logger):
    marker = tmp_path / "shutdown"
    marker.touch()
    watcher = ShutdownFileWatcher(marker, coordinator, mock_logger)
    
    with patch("threading.Thread") as thread_cls:
        assert watcher.start() is None
    
    thread_cls.assert_not_called()
    assert watcher.state == WatcherState.ALREADY_TRIGGERED
    assert coordinator.should_exit() is True
    assert coordinator.exit_origin == "shutdown-file-present"


def test_file_created_later_is_detected(tmp_path, coordinator, mock_logger):
    marker = tmp_path / "shutdown"
    watcher = ShutdownFileWatcher(marker, coordinator, mock_logger, poll_interval=0.05)
    
    handle = watcher.start()
    assert handle is not None
    assert watcher.state == WatcherState.POLLING
    assert coordinator.should_exit() is False
    
    time.sleep(0.1)
    marker.touch()
    
    # Detection latency is bounded by one poll interval
    assert wait_until(coordinator.should_exit, timeout=1.0)
    assert handle.join(1.0) is True
    assert watcher.state == WatcherState.TRIGGERED
    assert coordinator.exit_origin == "shutdown-file-detected"


def test_cancel_stops_polling_without_request(tmp_path, coordinator, mock_logger):
    watcher = ShutdownFileWatcher(tmp_path / "never", coordinator, mock_logger, poll_interval=0.2)
    handle = watcher.start()
    
    started = time.monotonic()
    handle.cancel()
    assert handle.join(1.0) is True
    
    assert time.monotonic() - started < 0.5
    assert watcher.state == WatcherState.CANCELED
    assert coordinator.should_exit() is False
    mock_logger.log_exit_request.assert_not_called()


def test_check_errors_do_not_stop_polling(tmp_path, coordinator, mock_logger):
    """A transient failure is logged and the next poll still detects the file."""
    watcher = ShutdownFileWatcher(tmp_path / "shutdown", coordinator, mock_logger, poll_interval=0.01)
    checks = iter([False, OSError("disk hiccup"), OSError("disk hiccup"), True])
    
    def fake_exists():
        result = next(checks)
        if isinstance(result, Exception):
            raise result
        return result
    
    with patch.object(watcher, "_marker_exists", side_effect=fake_exists):
        handle = watcher.start()
        assert handle.join(2.0) is True
    
    assert watcher.state == WatcherState.TRIGGERED
    assert coordinator.exit_origin == "shutdown-file-detected"
    warnings = [call.args[0] for call in mock_logger.log_warning.call_args_list]
    assert sum("disk hiccup" in message for message in warnings) == 2


def test_start_twice_raises(tmp_path, coordinator, mock_logger):
    watcher = ShutdownFileWatcher(None, coordinator, mock_logger)
    watcher.start()
    
    with pytest.raises(RuntimeError):
        watcher.start()


def test_watcher_thread_is_daemon(tmp_path, coordinator, mock_logger):
    watcher = ShutdownFileWatcher(tmp_path / "never", coordinator, mock_logger, poll_interval=0.05)
    handle = watcher.start()
    
    try:
        threads = [t for t in threading.enumerate() if t.name == "shutdown-file-watcher"]
        assert threads and all(t.daemon for t in threads)
        assert handle.is_alive
    finally:
        watcher.cancel()
        handle.join(1.0)


def test_check_error_at_start_falls_back_to_polling(tmp_path, coordinator, mock_logger):
    """A failed check during start is logged and the polling thread retries it."""
    watcher = ShutdownFileWatcher(tmp_path / "shutdown", coordinator, mock_logger, poll_interval=0.01)
    
    with patch.object(watcher, "_marker_exists", side_effect=[PermissionError("EACCES"), True]):
        handle = watcher.start()
        assert handle is not None
        assert handle.join(2.0) is True
    
    assert watcher.state == WatcherState.TRIGGERED
    assert coordinator.exit_origin == "shutdown-file-detected"
    mock_logger.log_warning.assert_any_call(
        f"Error checking shutdown file {tmp_path / 'shutdown'}: EACCES"
    )
