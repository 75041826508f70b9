"""Well-known origins of stop requests."""

SHUTDOWN_FILE_PRESENT = "shutdown-file-present"
SHUTDOWN_FILE_DETECTED = "shutdown-file-detected"
PROCESS_EXIT = "process-exit"
MANUAL = "manual"
