import sys
from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "serialize": True,  # JSON output
                "format": "{time} | {level} | {message}",
                "enqueue": True,
                "level": log_level
            }]
        )
    
    def log_iteration(self, iteration: int, timestamp: str):
        self.logger.bind(type="iteration", iteration=iteration, timestamp=timestamp).info(
            f"Iteration {iteration} wrote {timestamp}"
        )

    def log_exit_request(self, origin: str, accepted: bool):
        bound = self.logger.bind(type="exit_request", origin=origin, accepted=accepted)
        if accepted:
            bound.warning(f"Exit requested by {origin}")
        else:
            bound.debug(f"Exit already requested, ignoring {origin}")

    def log_heartbeat(self, tick: int, ceiling: int):
        self.logger.bind(type="heartbeat", tick=tick, ceiling=ceiling).info(
            f"Still shutting down ({tick}/{ceiling})"
        )

    def log_error(self, message: str):
        self.logger.bind(type="error").error(message)

    def log_warning(self, message: str):
        self.logger.bind(type="warning").warning(message)

    def log_info(self, message: str):
        self.logger.bind(type="info").info(message)

    def log_debug(self, message: str):
        self.logger.bind(type="debug").debug(message)
