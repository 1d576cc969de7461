"""Tracing for the JSON-RPC dispatcher.

Code asks for a tracer with :func:`get_tracer`; until
:func:`configure_telemetry` installs the SDK provider (``otel`` extra) the
spans are no-ops. Exported spans go to stderr or an OTLP collector, never to
stdout.
"""

from __future__ import annotations

import sys
from typing import Any

from opentelemetry import trace

# Span attribute keys set per request.
ATTR_RPC_METHOD = "mcp_arcgis.rpc.method"
ATTR_RPC_NOTIFICATION = "mcp_arcgis.rpc.notification"
ATTR_RPC_ERROR_CODE = "mcp_arcgis.rpc.error_code"
ATTR_CORRELATION_ID = "mcp_arcgis.correlation_id"

_INSTRUMENTATION_NAME = "mcp_arcgis"
_INSTALL_HINT = "Install it with: pip install mcp-arcgis[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "mcp-arcgis",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider exporting to stderr and/or *otlp_endpoint*.

    Raises ImportError when the ``otel`` extra is missing.
    """
    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    for processor in _span_processors(export_to_console, otlp_endpoint):
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_processors(to_stderr: bool, otlp_endpoint: str | None) -> list[Any]:
    from opentelemetry.sdk.trace.export import (
        BatchSpanProcessor,
        ConsoleSpanExporter,
        SimpleSpanProcessor,
    )

    processors: list[Any] = []
    if to_stderr:
        # stdout is the response stream.
        processors.append(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if otlp_endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError as exc:
            msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
            raise ImportError(msg) from exc
        processors.append(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    return processors
