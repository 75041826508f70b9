"""Tests for the worker runtime."""

import threading
from unittest.mock import Mock

import pytest

from webjob.modules.config import WorkerConfig
from webjob.modules.errors import ConfigurationError
from webjob.modules.telemetry import TelemetryClient
from webjob.modules.worker.loop import LoopOutcome
from webjob.modules.worker.runtime import EXIT_OK, EXIT_WORK_FAILED, WorkerRuntime


@pytest.fixture
def config(tmp_path):
    return WorkerConfig(
        connection_string="console://",
        output_dir=tmp_path / "output",
        work_interval=0.01,
        poll_interval=0.01,
        heartbeat_ceiling=3,
        heartbeat_interval=0.5,
        watcher_join_timeout=1.0
    )


@pytest.fixture
def telemetry():
    return Mock(spec=TelemetryClient)


def make_runtime(config, mock_logger, telemetry, sleeps=None):
    return WorkerRuntime(
        config,
        mock_logger,
        telemetry=telemetry,
        signals=[],
        sleep=(sleeps.append if sleeps is not None else lambda _: None)
    )


def test_unsupported_connection_string_fails_before_start(config, mock_logger):
    config.connection_string = "ftp://nowhere"
    
    with pytest.raises(ConfigurationError):
        WorkerRuntime(config, mock_logger, signals=[])


def test_stops_cleanly_on_request(config, mock_logger, telemetry):
    sleeps = []
    runtime = make_runtime(config, mock_logger, telemetry, sleeps)
    
    def stop_after_three(iteration, timestamp):
        if iteration == 3:
            runtime.stop()
    
    mock_logger.log_iteration.side_effect = stop_after_three
    
    assert runtime.run() == EXIT_OK
    
    assert runtime.result.outcome == LoopOutcome.STOPPED
    assert runtime.result.iterations == 3
    assert runtime.coordinator.exit_origin == "manual"
    lines = config.output_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert mock_logger.log_heartbeat.call_count == 3
    assert sleeps == [0.5, 0.5, 0.5]
    assert runtime.writer.closed is True
    telemetry.close.assert_called_once()
    assert runtime.sequencer.has_run is True


def test_shutdown_steps_order(config, mock_logger, telemetry):
    runtime = make_runtime(config, mock_logger, telemetry)
    runtime.stop()
    
    runtime.run()
    
    assert runtime.sequencer.step_names == [
        "flush-telemetry",
        "heartbeat",
        "stop-watcher",
        "release-resources",
    ]
    mock_logger.flush.assert_called()
    telemetry.flush.assert_called()


def test_failing_iteration_returns_failure_code(config, mock_logger, telemetry):
    telemetry.track_metric.side_effect = RuntimeError("sink exploded")
    runtime = make_runtime(config, mock_logger, telemetry)
    
    assert runtime.run() == EXIT_WORK_FAILED
    
    assert runtime.result.outcome == LoopOutcome.FAILED
    assert runtime.sequencer.has_run is True
    assert runtime.writer.closed is True


def test_existing_shutdown_file_stops_before_first_iteration(config, mock_logger, telemetry, tmp_path):
    marker = tmp_path / "shutdown"
    marker.touch()
    config.shutdown_file = marker
    runtime = make_runtime(config, mock_logger, telemetry)
    
    assert runtime.run() == EXIT_OK
    
    assert runtime.result.iterations == 0
    assert runtime.coordinator.exit_origin == "shutdown-file-present"
    assert config.output_path.read_text(encoding="utf-8") == ""


def test_shutdown_file_created_while_running(config, mock_logger, telemetry, tmp_path):
    marker = tmp_path / "shutdown"
    config.shutdown_file = marker
    runtime = make_runtime(config, mock_logger, telemetry)
    timer = threading.Timer(0.1, marker.touch)
    timer.start()
    
    try:
        assert runtime.run() == EXIT_OK
    finally:
        timer.cancel()
    
    assert runtime.coordinator.exit_origin == "shutdown-file-detected"
    assert runtime.watcher.handle.is_alive is False


def test_failing_cleanup_step_still_releases_resources(config, mock_logger, telemetry):
    mock_logger.flush.side_effect = RuntimeError("flush failed")
    runtime = make_runtime(config, mock_logger, telemetry)
    runtime.stop()
    
    assert runtime.run() == EXIT_OK
    
    telemetry.flush.assert_called()
    telemetry.close.assert_called_once()
    assert runtime.writer.closed is True
