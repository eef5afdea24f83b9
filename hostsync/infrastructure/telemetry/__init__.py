"""
hostsync Telemetry Infrastructure

Architectural Intent:
- Optional OpenTelemetry integration for run outcomes
"""

from hostsync.infrastructure.telemetry.otel_exporter import (
    OTELConfig,
    RunTelemetry,
    create_telemetry,
)

__all__ = [
    "OTELConfig",
    "RunTelemetry",
    "create_telemetry",
]
