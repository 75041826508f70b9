"""Process root: builds the worker, runs the loop and the shutdown sequence."""

import signal
import time
from contextlib import ExitStack
from typing import Callable, List, Optional

from ..config import WorkerConfig
from ..logging import BaseLogger
from ..shutdown import origins
from ..shutdown import (
    ExitCoordinator,
    ShutdownFileWatcher,
    ShutdownSequencer,
    SignalSource,
    heartbeat,
    stop_watcher,
)
from ..telemetry import TelemetryClient, create_telemetry_client
from .job import TimestampJob
from .loop import LoopOutcome, LoopResult, WorkLoop
from .output import TimestampWriter

EXIT_OK = 0
EXIT_WORK_FAILED = 1
EXIT_CONFIG_ERROR = 2


class WorkerRuntime:
    """Owns every resource of the worker process.

    Construction validates the telemetry configuration, so configuration
    errors surface before anything is started. ``run`` acquires the output
    file and the stop handlers, runs the work loop and then, on every exit
    path, the shutdown sequence.
    """
    
    def __init__(
        self,
        config: WorkerConfig,
        logger: BaseLogger,
        telemetry: Optional[TelemetryClient] = None,
        signals: Optional[List[signal.Signals]] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the worker runtime.
        
        Args:
            config: Validated worker configuration
            logger: Logger instance
            telemetry: Telemetry client, created from the connection string when omitted
            signals: Signals to handle, the platform defaults when omitted
            sleep: Sleep function used by the shutdown heartbeat
            
        Raises:
            ConfigurationError: If the telemetry connection string is not usable
        """
        self.config = config
        self.logger = logger
        self.telemetry = telemetry or create_telemetry_client(config.connection_string, logger)
        self.sleep = sleep
        
        self.coordinator = ExitCoordinator(logger)
        self.signal_source = SignalSource(self.coordinator, logger, signals)
        self.watcher = ShutdownFileWatcher(
            config.shutdown_file,
            self.coordinator,
            logger,
            poll_interval=config.poll_interval
        )
        self.writer = TimestampWriter(config.output_path)
        self.sequencer = ShutdownSequencer(logger)
        self._resources = ExitStack()
        self.result: Optional[LoopResult] = None
    
    def _acquire(self) -> None:
        self._resources.callback(self.telemetry.close)
        self.signal_source.install()
        self._resources.callback(self.signal_source.restore)
        self.writer.open()
        self._resources.callback(self.writer.close)
        self.logger.log_info(f"Writing timestamps to {self.writer.path}")
    
    def _register_shutdown_steps(self) -> None:
        self.sequencer.register_step("flush-telemetry", self._flush, priority=0)
        self.sequencer.register_step(
            "heartbeat",
            lambda: heartbeat(
                self.logger,
                self.config.heartbeat_ceiling,
                self.config.heartbeat_interval,
                sleep=self.sleep
            ),
            priority=1
        )
        self.sequencer.register_step(
            "stop-watcher",
            lambda: stop_watcher(self.logger, self.watcher.handle, self.config.watcher_join_timeout),
            priority=2
        )
        self.sequencer.register_step("release-resources", self._resources.close, priority=3)
    
    def stop(self) -> bool:
        """Request a graceful stop from code running in the same process."""
        return self.coordinator.request_exit(origins.MANUAL)
    
    def _flush(self) -> None:
        try:
            self.telemetry.flush()
        finally:
            self.logger.flush()
    
    def run(self) -> int:
        """
        Run the worker until a stop source fires or an iteration fails.
        
        Returns:
            The process exit code
        """
        self._register_shutdown_steps()
        try:
            self._acquire()
            self.watcher.start()
            
            job = TimestampJob(
                self.writer,
                self.telemetry,
                self.logger,
                trace_message=self.config.trace_message,
                metric_name=self.config.metric_name,
                metric_value=self.config.metric_value
            )
            loop = WorkLoop(self.coordinator, job, self.logger, interval=self.config.work_interval)
            self.result = loop.run()
        finally:
            self.sequencer.run()
        
        if self.result.outcome == LoopOutcome.FAILED:
            return EXIT_WORK_FAILED
        return EXIT_OK
