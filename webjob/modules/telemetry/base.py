from abc import ABC, abstractmethod
from enum import Enum


class Severity(str, Enum):
    VERBOSE = "verbose"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class TelemetryClient(ABC):
    """Base class for telemetry sinks."""
    
    @abstractmethod
    def track_trace(self, message: str, severity: Severity = Severity.INFO) -> None:
        """Record a trace message."""
        pass
    
    @abstractmethod
    def track_metric(self, name: str, value: float) -> None:
        """Record a named numeric metric."""
        pass
    
    @abstractmethod
    def flush(self) -> None:
        """Deliver everything recorded so far. Returns once delivery completed or failed."""
        pass
    
    def close(self) -> None:
        """Release the client. Flushes by default."""
        self.flush()
