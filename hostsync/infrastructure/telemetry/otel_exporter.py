"""
OpenTelemetry Exporter for hostsync

Architectural Intent:
- Exports run telemetry to OTLP-compatible backends
- One span per run, plus metrics for changes, rollbacks and ledger size
- Disabled unless an endpoint is configured

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC
from hostsync.application.dtos.run_dtos import RunReport
from hostsync.domain.value_objects.outcomes import RunOutcome

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "hostsync"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://."
                )


class RunTelemetry:
    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._meter: Any = None
        self._tracer_provider: Any = None
        self._meter_provider: Any = None
        self._gauges: dict[str, Any] = {}

    @property
    def enabled(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.debug("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            from opentelemetry import metrics, trace
            from opentelemetry.sdk.resources import Resource, SERVICE_NAME
            from opentelemetry.sdk.trace import TracerProvider
            from opentelemetry.sdk.trace.export import BatchSpanProcessor
            from opentelemetry.sdk.metrics import MeterProvider
            from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                OTLPSpanExporter,
            )
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
                OTLPMetricExporter,
            )

            resource = Resource(attributes={SERVICE_NAME: self.config.service_name})
            insecure = self.config.endpoint.startswith("http://")

            self._tracer_provider = TracerProvider(resource=resource)
            self._tracer_provider.add_span_processor(
                BatchSpanProcessor(
                    OTLPSpanExporter(endpoint=self.config.endpoint, insecure=insecure)
                )
            )
            trace.set_tracer_provider(self._tracer_provider)

            reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=self.config.endpoint, insecure=insecure)
            )
            self._meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
            metrics.set_meter_provider(self._meter_provider)
            self._meter = metrics.get_meter(__name__)

            self._initialized = True
        except ImportError:
            logger.warning("OpenTelemetry SDK not installed, telemetry disabled")
        except Exception as e:
            logger.error("Failed to initialize OTEL: %s", e)

    def _get_gauge(self, name: str, unit: str = "") -> Any:
        if name not in self._gauges and self._meter:
            self._gauges[name] = self._meter.create_gauge(name, unit=unit)
        return self._gauges.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        unit: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Record a metric value."""
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "unit": unit,
                "attributes": attributes or {},
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

        if self._initialized:
            gauge = self._get_gauge(name, unit)
            if gauge:
                gauge.set(value, attributes=attributes or {})

    def record_run(self, report: RunReport) -> None:
        """Record the outcome of a finished run."""
        attributes = {"mode": report.mode.value, "outcome": report.outcome.value}
        self.record_metric(
            "hostsync.run.changed", 1.0 if report.changed else 0.0, attributes=attributes
        )
        self.record_metric(
            "hostsync.run.rolled_back",
            1.0 if report.outcome is RunOutcome.ROLLED_BACK else 0.0,
            attributes=attributes,
        )
        self.record_metric(
            "hostsync.ledger.entries", float(report.ledger_entries), attributes=attributes
        )

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span."""
        if not self._initialized:
            return None

        from opentelemetry import trace

        tracer = trace.get_tracer(__name__)
        return tracer.start_span(name, attributes=attributes or {})

    def end_span(self, span: Any) -> None:
        if span:
            span.end()

    def shutdown(self) -> None:
        """Flush and stop exporters."""
        if not self._initialized:
            return
        self._tracer_provider.shutdown()
        self._meter_provider.shutdown()
        self._metrics_buffer.clear()
        self._initialized = False


def create_telemetry(
    endpoint: Optional[str] = None,
    insecure: bool = False,
    service_name: str = "hostsync",
) -> RunTelemetry:
    """Factory function to create and initialize run telemetry."""
    telemetry = RunTelemetry(
        OTELConfig(endpoint=endpoint or "", service_name=service_name, insecure=insecure)
    )
    telemetry.initialize()
    return telemetry
