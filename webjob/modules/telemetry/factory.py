from urllib.parse import parse_qs, urlsplit, urlunsplit

from ..errors import ConfigurationError
from ..logging import BaseLogger
from .base import TelemetryClient
from .console import ConsoleTelemetryClient
from .prometheus import PrometheusTelemetryClient

DEFAULT_JOB_NAME = "webjob"


def create_telemetry_client(connection_string: str, logger: BaseLogger) -> TelemetryClient:
    """Create a telemetry client from a connection string.
    
    Args:
        connection_string: ``console://`` or the push gateway URL, optionally
            with a ``job`` query parameter
        logger: Logger handed to clients that mirror traces into the log
        
    Returns:
        A telemetry client instance
        
    Raises:
        ConfigurationError: If the connection string is empty or its scheme is not supported
    """
    if not connection_string or not connection_string.strip():
        raise ConfigurationError("A telemetry connection string is required")
    
    parts = urlsplit(connection_string.strip())
    scheme = parts.scheme.lower()
    
    if scheme == "console":
        return ConsoleTelemetryClient(logger)
    
    if scheme in ("http", "https"):
        if not parts.netloc:
            raise ConfigurationError(f"Push gateway address missing in connection string: {connection_string}")
        job_name = parse_qs(parts.query).get("job", [DEFAULT_JOB_NAME])[0]
        push_gateway = urlunsplit((parts.scheme, parts.netloc, parts.path.rstrip("/"), "", ""))
        return PrometheusTelemetryClient(push_gateway, job_name, logger)
    
    raise ConfigurationError(f"Unsupported telemetry connection string: {connection_string}")
