from .base import TelemetryClient, Severity
from .console import ConsoleTelemetryClient
from .prometheus import PrometheusTelemetryClient
from .factory import create_telemetry_client

__all__ = [
    'TelemetryClient',
    'Severity',
    'ConsoleTelemetryClient',
    'PrometheusTelemetryClient',
    'create_telemetry_client'
]
