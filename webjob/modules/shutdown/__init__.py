"""Shutdown coordination: stop sources, the exit decision and the shutdown sequence."""

from .coordinator import ExitCoordinator
from .watcher import ShutdownFileWatcher, WatcherHandle, WatcherState
from .signals import SignalSource
from .sequencer import ShutdownSequencer, heartbeat, stop_watcher

__all__ = [
    'ExitCoordinator',
    'ShutdownFileWatcher',
    'WatcherHandle',
    'WatcherState',
    'SignalSource',
    'ShutdownSequencer',
    'heartbeat',
    'stop_watcher',
]
