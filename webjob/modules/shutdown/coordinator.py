"""Exit coordinator holding the single authoritative stop decision."""

import threading
from typing import Optional

from ..logging import BaseLogger


class ExitCoordinator:
    """Reconciles stop requests from every source into one exit decision.

    The exit state only ever moves from "continue" to "stop". Requests are
    serialized by a lock. Signal handlers must not call ``request_exit``
    directly, since they may interrupt a thread holding that lock or the
    wake-up event's own lock; ``SignalSource`` forwards them from a thread.
    """
    
    def __init__(self, logger: BaseLogger):
        """
        Initialize the exit coordinator.
        
        Args:
            logger: Logger instance for logging stop requests
        """
        self.logger = logger
        self._lock = threading.Lock()
        self._should_exit = False
        self._origin: Optional[str] = None
        self._wakeup = threading.Event()
    
    def request_exit(self, origin: str) -> bool:
        """
        Request process exit. Safe to call from any thread.
        
        Args:
            origin: The stop source (signal name, file watcher, manual)
            
        Returns:
            True if this call made the transition to "stop", False if exit
            had already been requested
        """
        with self._lock:
            accepted = not self._should_exit
            if accepted:
                self._should_exit = True
                self._origin = origin
                self._wakeup.set()
        try:
            self.logger.log_exit_request(origin, accepted)
        except Exception:
            # Losing the log line must not lose the request
            pass
        return accepted
    
    def should_exit(self) -> bool:
        """Check whether exit has been requested. Never blocks."""
        return self._should_exit
    
    def wait(self, timeout: float) -> bool:
        """
        Wait up to ``timeout`` seconds, returning early once exit is requested.
        
        Returns:
            Whether exit has been requested
        """
        self._wakeup.wait(timeout)
        return self._should_exit
    
    @property
    def exit_origin(self) -> Optional[str]:
        """Origin of the request that triggered exit, if any."""
        return self._origin
