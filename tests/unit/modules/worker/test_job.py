from unittest.mock import Mock, call

from webjob.modules.telemetry import Severity, TelemetryClient
from webjob.modules.worker.job import TimestampJob
from webjob.modules.worker.output import TimestampWriter


def test_job_reports_telemetry_then_writes(mock_logger):
    events = Mock()
    telemetry = Mock(spec=TelemetryClient)
    writer = Mock(spec=TimestampWriter)
    writer.write_timestamp.return_value = "2024-01-01 00:00:00"
    events.attach_mock(telemetry, "telemetry")
    events.attach_mock(writer, "writer")
    
    job = TimestampJob(writer, telemetry, mock_logger, trace_message="hello", metric_name="Sample", metric_value=150)
    job(7)
    
    assert events.mock_calls == [
        call.telemetry.track_trace("hello", Severity.INFO),
        call.telemetry.track_metric("Sample", 150),
        call.telemetry.flush(),
        call.writer.write_timestamp(),
    ]
    mock_logger.log_iteration.assert_called_once_with(7, "2024-01-01 00:00:00")
