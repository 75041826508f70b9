"""Adapters turning OS and interpreter stop notifications into exit requests."""

import atexit
import queue
import signal
import threading
import types
from typing import Any, Callable, Dict, List, Optional, Union

from ..logging import BaseLogger
from .coordinator import ExitCoordinator
from . import origins

# Type for signal handlers
SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]


def default_signals() -> List[signal.Signals]:
    """Signals that request a graceful stop on the current platform."""
    names = ("SIGINT", "SIGTERM", "SIGHUP", "SIGBREAK")
    return [getattr(signal, name) for name in names if hasattr(signal, name)]


class SignalSource:
    """Wires every stop notification to ``ExitCoordinator.request_exit``.

    Signal handlers run on the main thread between bytecodes, possibly while
    that thread holds a lock the coordinator needs. They therefore only put
    the signal name on a ``queue.SimpleQueue``, whose ``put`` is reentrant,
    and a dispatcher thread forwards it to the coordinator.

    SIGINT no longer raises ``KeyboardInterrupt``: the work loop sees the stop
    at its next check instead of being aborted mid-iteration.

    The process-exit hook stays registered until the interpreter exits, so it
    still reports an exit that happened without any other stop request.
    """

    def __init__(
        self,
        coordinator: ExitCoordinator,
        logger: BaseLogger,
        signals: Optional[List[signal.Signals]] = None
    ):
        self.coordinator = coordinator
        self.logger = logger
        self.signals = default_signals() if signals is None else list(signals)
        self._original_handlers: Dict[signal.Signals, SignalHandlerType] = {}
        self._pending: "queue.SimpleQueue[Optional[str]]" = queue.SimpleQueue()
        self._dispatcher: Optional[threading.Thread] = None
        self._installed = False
        self._exit_hook_registered = False

    @property
    def installed(self) -> bool:
        return self._installed

    def install(self) -> None:
        """
        Install the signal handlers and the process-exit hook.
        This must be called from the main thread; repeated calls are no-ops.
        """
        if self._installed:
            self.logger.log_debug("Signal handlers already installed")
            return
        if threading.current_thread() is not threading.main_thread():
            raise RuntimeError("Signal handlers can only be installed from the main thread")

        self._dispatcher = threading.Thread(
            target=self._dispatch,
            name="stop-signal-dispatcher",
            daemon=True
        )
        self._dispatcher.start()
        for sig in self.signals:
            self._original_handlers[sig] = signal.getsignal(sig)
            signal.signal(sig, self._handle_signal)
        if not self._exit_hook_registered:
            atexit.register(self._handle_process_exit)
            self._exit_hook_registered = True
        self._installed = True
        self.logger.log_debug(
            f"Installed stop handlers for {', '.join(sig.name for sig in self.signals)}"
        )

    def restore(self, timeout: float = 1.0) -> None:
        """Restore original signal handlers and stop the dispatcher.

        Signals already received are forwarded before the dispatcher exits.
        """
        if not self._installed:
            return
        for sig, handler in self._original_handlers.items():
            if handler is not None:
                signal.signal(sig, handler)
        self._original_handlers.clear()
        self._pending.put(None)
        if self._dispatcher is not None:
            self._dispatcher.join(timeout)
            self._dispatcher = None
        self._installed = False

    def _handle_signal(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        """
        Handle termination signals without taking any lock.

        Args:
            sig_num: The signal number that was received
            frame: The current stack frame
        """
        try:
            sig_name = signal.Signals(sig_num).name
        except ValueError:
            sig_name = f"signal-{sig_num}"
        self._pending.put(sig_name)

    def _dispatch(self) -> None:
        while True:
            origin = self._pending.get()
            if origin is None:
                return
            self._request(origin)

    def _handle_process_exit(self) -> None:
        # Runs after the main thread finished, so no lock can be held by it
        self._request(origins.PROCESS_EXIT)

    def _request(self, origin: str) -> None:
        try:
            self.coordinator.request_exit(origin)
        except Exception as e:
            try:
                self.logger.log_error(f"Error handling stop notification {origin}: {str(e)}")
            except Exception:
                pass

    def __enter__(self) -> 'SignalSource':
        self.install()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.restore()
