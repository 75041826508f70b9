from ..logging import BaseLogger
from ..telemetry import TelemetryClient, Severity
from .output import TimestampWriter


class TimestampJob:
    """One unit of work: report telemetry, then append the current time to the output file."""
    
    def __init__(
        self,
        writer: TimestampWriter,
        telemetry: TelemetryClient,
        logger: BaseLogger,
        trace_message: str = "Hello, telemetry!",
        metric_name: str = "SampleMetric",
        metric_value: float = 150
    ):
        self.writer = writer
        self.telemetry = telemetry
        self.logger = logger
        self.trace_message = trace_message
        self.metric_name = metric_name
        self.metric_value = metric_value
    
    def __call__(self, iteration: int) -> None:
        self.telemetry.track_trace(self.trace_message, Severity.INFO)
        self.telemetry.track_metric(self.metric_name, self.metric_value)
        self.telemetry.flush()
        
        stamp = self.writer.write_timestamp()
        self.logger.log_iteration(iteration, stamp)
