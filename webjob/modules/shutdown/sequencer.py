"""Runs the post-loop shutdown steps exactly once."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..logging import BaseLogger
from .watcher import WatcherHandle


@dataclass
class ShutdownStep:
    """A single step of the shutdown sequence."""
    name: str
    handler: Callable[[], None]
    priority: int = 0


class ShutdownSequencer:
    """Executes registered shutdown steps in priority order, once.

    Every step is guarded on its own: a failing step is logged and the
    remaining steps still run.
    """
    
    def __init__(self, logger: BaseLogger):
        """
        Initialize the shutdown sequencer.
        
        Args:
            logger: Logger instance for logging shutdown events
        """
        self._steps: List[ShutdownStep] = []
        self._lock = threading.Lock()
        self._has_run = False
        self.logger = logger
    
    @property
    def has_run(self) -> bool:
        """Check if the shutdown sequence already ran."""
        return self._has_run
    
    @property
    def step_names(self) -> List[str]:
        return [step.name for step in self._steps]
    
    def register_step(self, name: str, handler: Callable[[], None], priority: int = 0) -> None:
        """Register a shutdown step.
        
        Args:
            name: Name of the step
            handler: Callable to execute during shutdown
            priority: Priority of the step (lower numbers execute first)
        """
        for existing in self._steps:
            if existing.name == name:
                existing.handler = handler
                existing.priority = priority
                self._steps.sort(key=lambda s: s.priority)
                return
                
        self._steps.append(ShutdownStep(name, handler, priority))
        self._steps.sort(key=lambda s: s.priority)
    
    def run(self) -> bool:
        """
        Execute all registered steps in order of priority.
        
        Returns:
            True if this call ran the sequence, False if it had already run
        """
        with self._lock:
            if self._has_run:
                self.logger.log_debug("Shutdown sequence already ran")
                return False
            self._has_run = True

        self.logger.log_info("Starting graceful shutdown...")
        for step in list(self._steps):
            try:
                self.logger.log_info(f"Executing shutdown step: {step.name}")
                step.handler()
            except Exception as e:
                self.logger.log_error(f"Error in shutdown step {step.name}: {str(e)}")
        self.logger.log_info("Graceful shutdown completed")
        return True


def heartbeat(
    logger: BaseLogger,
    ceiling: int,
    interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Keep the process alive for ``ceiling`` intervals, logging one line each time.

    Gives asynchronous log and telemetry sinks time to deliver queued records
    before the host reaps the process.
    
    Returns:
        The number of heartbeat lines emitted
    """
    for tick in range(1, ceiling + 1):
        logger.log_heartbeat(tick, ceiling)
        sleep(interval)
    return ceiling


def stop_watcher(logger: BaseLogger, handle: Optional[WatcherHandle], timeout: float = 5.0) -> bool:
    """
    Cancel the shutdown file watcher and wait for it to finish.
    
    Returns:
        False if the watcher was still running when the timeout elapsed
    """
    if handle is None:
        logger.log_debug("No shutdown file watcher running")
        return True
    handle.cancel()
    if handle.join(timeout):
        logger.log_info("Shutdown file watcher stopped")
        return True
    logger.log_warning(
        f"Shutdown file watcher did not stop within {timeout:g} seconds, continuing shutdown"
    )
    return False
