import json
from datetime import datetime
from typing import Any, Dict, List

from ..logging import BaseLogger
from .base import TelemetryClient, Severity


class ConsoleTelemetryClient(TelemetryClient):
    """Client that writes telemetry records as JSON through the logger on flush.

    Going through the logger keeps telemetry and log lines in one ordered stream.
    """
    
    def __init__(self, logger: BaseLogger):
        self.logger = logger
        self._pending: List[Dict[str, Any]] = []
    
    def _format_datetime(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    
    def track_trace(self, message: str, severity: Severity = Severity.INFO) -> None:
        self._pending.append({
            "type": "trace",
            "time": self._format_datetime(datetime.now()),
            "severity": severity.value,
            "message": message
        })
    
    def track_metric(self, name: str, value: float) -> None:
        self._pending.append({
            "type": "metric",
            "time": self._format_datetime(datetime.now()),
            "name": name,
            "value": value
        })
    
    def flush(self) -> None:
        pending, self._pending = self._pending, []
        for record in pending:
            self.logger.log_info(f"Telemetry: {json.dumps(record)}")
