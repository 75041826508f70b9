"""The periodic work loop."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..errors import WorkIterationError
from ..logging import BaseLogger
from ..shutdown import ExitCoordinator


class LoopOutcome(str, Enum):
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass
class LoopResult:
    """How and when the work loop ended."""
    outcome: LoopOutcome
    iterations: int
    error: Optional[WorkIterationError] = None


class WorkLoop:
    """Runs a unit of work repeatedly until exit is requested.

    The exit state is checked only between iterations, so an iteration that
    has started always runs to completion. A failing iteration ends the loop.
    """
    
    def __init__(
        self,
        coordinator: ExitCoordinator,
        work: Callable[[int], None],
        logger: BaseLogger,
        interval: float = 1.0
    ):
        self.coordinator = coordinator
        self.work = work
        self.logger = logger
        self.interval = interval
    
    def run(self) -> LoopResult:
        iterations = 0
        self.logger.log_info(f"Work loop started, interval {self.interval:g}s")
        while True:
            if self.coordinator.should_exit():
                self.logger.log_info(
                    f"Work loop stopping after {iterations} iterations "
                    f"(requested by {self.coordinator.exit_origin})"
                )
                return LoopResult(LoopOutcome.STOPPED, iterations)
            
            iterations += 1
            try:
                self.work(iterations)
            except Exception as e:
                error = WorkIterationError(iterations, e)
                self.logger.log_exception(f"{error}, stopping work loop", e)
                return LoopResult(LoopOutcome.FAILED, iterations, error)
            
            self.coordinator.wait(self.interval)
