from .output import TimestampWriter
from .job import TimestampJob
from .loop import WorkLoop, LoopOutcome, LoopResult
from .runtime import WorkerRuntime, EXIT_OK, EXIT_WORK_FAILED, EXIT_CONFIG_ERROR

__all__ = [
    'TimestampWriter',
    'TimestampJob',
    'WorkLoop',
    'LoopOutcome',
    'LoopResult',
    'WorkerRuntime',
    'EXIT_OK',
    'EXIT_WORK_FAILED',
    'EXIT_CONFIG_ERROR',
]
