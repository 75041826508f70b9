import sys
from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for hosted log streams."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
                "colorize": False,
                "enqueue": True,
                "level": log_level
            }]
        )
    
    def log_iteration(self, iteration: int, timestamp: str):
        self.logger.info(f"Iteration {iteration} wrote {timestamp}")

    def log_exit_request(self, origin: str, accepted: bool):
        if accepted:
            self.logger.warning(f"Exit requested by {origin}")
        else:
            self.logger.debug(f"Exit already requested, ignoring {origin}")

    def log_heartbeat(self, tick: int, ceiling: int):
        self.logger.info(f"Still shutting down ({tick}/{ceiling})")

    def log_error(self, message: str):
        self.logger.error(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_debug(self, message: str):
        self.logger.debug(message)
