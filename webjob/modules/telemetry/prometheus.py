from typing import Dict
from prometheus_client import CollectorRegistry, Counter, Gauge, push_to_gateway

from ..logging import BaseLogger
from .base import TelemetryClient, Severity


class PrometheusTelemetryClient(TelemetryClient):
    """Client that sends telemetry to a Prometheus push gateway."""
    
    def __init__(self, push_gateway: str, job_name: str, logger: BaseLogger):
        """Initialize the Prometheus client.
        
        Args:
            push_gateway: URL of the Prometheus push gateway
            job_name: Name of the job for the metrics
            logger: Logger that also receives every trace message
        """
        self.push_gateway = push_gateway
        self.job_name = job_name
        self.logger = logger
        self.registry = CollectorRegistry()
        
        self.traces_total = Counter(
            'webjob_traces_total',
            'Total number of trace messages',
            ['severity'],
            registry=self.registry
        )
        self.flush_failures = 0
        self._gauges: Dict[str, Gauge] = {}
    
    def _gauge(self, name: str) -> Gauge:
        gauge = self._gauges.get(name)
        if gauge is None:
            gauge = Gauge(
                f'webjob_{_metric_name(name)}',
                f'Last reported value of {name}',
                registry=self.registry
            )
            self._gauges[name] = gauge
        return gauge
    
    def track_trace(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.traces_total.labels(severity=severity.value).inc()
        if severity in (Severity.ERROR, Severity.CRITICAL):
            self.logger.log_error(message)
        elif severity == Severity.WARNING:
            self.logger.log_warning(message)
        elif severity == Severity.VERBOSE:
            self.logger.log_debug(message)
        else:
            self.logger.log_info(message)
    
    def track_metric(self, name: str, value: float) -> None:
        self._gauge(name).set(value)
    
    def flush(self) -> None:
        """Push all collected metrics to the Prometheus gateway."""
        try:
            push_to_gateway(
                self.push_gateway,
                job=self.job_name,
                registry=self.registry
            )
        except OSError as e:
            # Delivery failures are transient; the next flush pushes the same registry again
            self.flush_failures += 1
            self.logger.log_warning(f"Failed to push telemetry to {self.push_gateway}: {e}")


def _metric_name(name: str) -> str:
    cleaned = "".join(ch if ch.isalnum() else "_" for ch in name).strip("_").lower()
    return cleaned or "metric"
