"""Background watcher for an externally created shutdown marker file."""

import threading
from enum import Enum
from pathlib import Path
from typing import Optional

from ..logging import BaseLogger
from .coordinator import ExitCoordinator
from . import origins


class WatcherState(str, Enum):
    NOT_STARTED = "not_started"
    DISABLED = "disabled"
    ALREADY_TRIGGERED = "already_triggered"
    POLLING = "polling"
    TRIGGERED = "triggered"
    CANCELED = "canceled"


class WatcherHandle:
    """Cancellation signal and join point of a running watcher thread."""

    def __init__(self, thread: threading.Thread, cancel_event: threading.Event):
        self._thread = thread
        self._cancel_event = cancel_event

    def cancel(self) -> None:
        """Ask the watcher to stop at its next poll."""
        self._cancel_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the watcher thread. Returns True if it finished in time."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()


class ShutdownFileWatcher:
    """Polls for a marker file and requests exit once it appears.

    A missing path disables the watcher. A file that already exists at start
    triggers exit immediately without starting a thread. Otherwise a single
    daemon thread checks for the file every ``poll_interval`` seconds until it
    is found or the watcher is canceled. Errors while checking are logged and
    polling continues.
    """

    def __init__(
        self,
        path: Optional[Path],
        coordinator: ExitCoordinator,
        logger: BaseLogger,
        poll_interval: float = 1.0
    ):
        self.path = Path(path) if path is not None else None
        self.coordinator = coordinator
        self.logger = logger
        self.poll_interval = poll_interval
        self.state = WatcherState.NOT_STARTED
        self._cancel_event = threading.Event()
        self._handle: Optional[WatcherHandle] = None

    @property
    def handle(self) -> Optional[WatcherHandle]:
        return self._handle

    def start(self) -> Optional[WatcherHandle]:
        """
        Start watching for the marker file.

        Returns:
            A handle to the polling thread, or None when no thread was needed

        Raises:
            RuntimeError: If the watcher was already started
        """
        if self.state != WatcherState.NOT_STARTED:
            raise RuntimeError(f"Shutdown file watcher already started (state: {self.state.value})")

        if self.path is None:
            self.state = WatcherState.DISABLED
            self.logger.log_info("No shutdown file configured, shutdown file watcher disabled")
            return None

        if self._check_marker():
            self.state = WatcherState.ALREADY_TRIGGERED
            self.logger.log_warning(f"Shutdown file {self.path} already present")
            self.coordinator.request_exit(origins.SHUTDOWN_FILE_PRESENT)
            return None

        self.state = WatcherState.POLLING
        thread = threading.Thread(
            target=self._poll,
            name="shutdown-file-watcher",
            daemon=True
        )
        self._handle = WatcherHandle(thread, self._cancel_event)
        thread.start()
        self.logger.log_info(
            f"Watching for shutdown file {self.path} every {self.poll_interval:g}s"
        )
        return self._handle

    def cancel(self) -> None:
        self._cancel_event.set()

    def _marker_exists(self) -> bool:
        return self.path.exists()

    def _check_marker(self) -> bool:
        """Check for the marker file, treating a failed check as "not there yet"."""
        try:
            return self._marker_exists()
        except OSError as e:
            self.logger.log_warning(f"Error checking shutdown file {self.path}: {str(e)}")
            return False

    def _poll(self) -> None:
        while not self._cancel_event.is_set():
            if self._check_marker():
                self.state = WatcherState.TRIGGERED
                self.logger.log_warning(f"Shutdown file {self.path} detected")
                self.coordinator.request_exit(origins.SHUTDOWN_FILE_DETECTED)
                return

            if self._cancel_event.wait(self.poll_interval):
                break

        self.state = WatcherState.CANCELED
        self.logger.log_info("Shutdown file watcher canceled")
