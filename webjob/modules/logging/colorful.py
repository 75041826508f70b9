import click
from .base import BaseLogger
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for interactive usage."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "enqueue": True,
                "level": log_level
            }]
        )
    
    def log_iteration(self, iteration: int, timestamp: str):
        self.logger.info(
            click.style(f"Iteration {iteration}", fg="cyan", bold=True)
            + click.style(f" wrote {timestamp}", fg="white")
        )

    def log_exit_request(self, origin: str, accepted: bool):
        if accepted:
            self.logger.warning(click.style(f"Exit requested by {origin}", fg="yellow", bold=True))
        else:
            self.logger.debug(click.style(f"Exit already requested, ignoring {origin}", fg="blue"))

    def log_heartbeat(self, tick: int, ceiling: int):
        self.logger.info(click.style(f"Still shutting down ({tick}/{ceiling})", fg="magenta"))

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
