"""Worker configuration."""
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigurationError

SHUTDOWN_FILE_ENV = "WEBJOBS_SHUTDOWN_FILE"
CONNECTION_STRING_ENV = "WEBJOB_TELEMETRY_CONNECTION_STRING"


class WorkerConfig(BaseModel):
    connection_string: str
    shutdown_file: Optional[Path] = None
    output_dir: Path = Path("output")
    output_file_name: str = "output.txt"
    work_interval: float = 1.0  # seconds between iterations
    poll_interval: float = 1.0  # seconds between shutdown file checks
    heartbeat_ceiling: int = 30  # heartbeat lines emitted during shutdown
    heartbeat_interval: float = 1.0
    watcher_join_timeout: float = 5.0
    trace_message: str = "Hello, telemetry!"
    metric_name: str = "SampleMetric"
    metric_value: float = 150

    @field_validator('connection_string')
    @classmethod
    def validate_connection_string(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("a telemetry connection string is required")
        return value.strip()

    @field_validator('shutdown_file', mode='before')
    @classmethod
    def empty_shutdown_file_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator('work_interval', 'poll_interval', 'heartbeat_interval', 'watcher_join_timeout')
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator('heartbeat_ceiling')
    @classmethod
    def validate_ceiling(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file_name

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> 'WorkerConfig':
        """Build the configuration from explicit values, falling back to the environment.

        The shutdown marker path is read from the environment here and nowhere else.

        Raises:
            ConfigurationError: If a required value is missing or a value is invalid
        """
        environ = os.environ if environ is None else environ
        values = {key: value for key, value in overrides.items() if value is not None}
        values.setdefault('connection_string', environ.get(CONNECTION_STRING_ENV, ""))
        values.setdefault('shutdown_file', environ.get(SHUTDOWN_FILE_ENV))
        try:
            return cls(**values)
        except ValidationError as err:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in err.errors()
            )
            raise ConfigurationError(f"Invalid configuration: {problems}") from err
