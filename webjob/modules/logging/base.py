from abc import ABC, abstractmethod
from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for loggers.

    Implementations configure loguru sinks with ``enqueue=True`` so that the
    watcher thread and signal handlers can log without contending for the sink.
    """
    
    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level
    
    @abstractmethod
    def log_iteration(self, iteration: int, timestamp: str):
        """Log a completed work iteration."""
        pass

    @abstractmethod
    def log_exit_request(self, origin: str, accepted: bool):
        """Log a stop request and whether it was the first one."""
        pass

    @abstractmethod
    def log_heartbeat(self, tick: int, ceiling: int):
        """Log one shutdown heartbeat line."""
        pass

    @abstractmethod
    def log_error(self, message: str):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass

    def flush(self) -> None:
        """Block until every queued record has reached its sink."""
        self.logger.complete()

    def log_exception(self, message: str, error: BaseException) -> None:
        """Log an error message together with the traceback of ``error``."""
        self.logger.opt(exception=error).error(message)
