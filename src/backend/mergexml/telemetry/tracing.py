"""OpenTelemetry tracing configuration and the @loggable call aspect."""

import functools
import json
import logging
import os
from typing import Any, Callable, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

log = logging.getLogger(__name__)

# Module-level flags to track initialization status
_TELEMETRY_INITIALIZED = False
_TRACER_INSTANCE: Optional[trace.Tracer] = None

# Environment variables for telemetry
DEFAULT_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "mergexml")
DEFAULT_SERVICE_VERSION = os.getenv("OTEL_SERVICE_VERSION", "0.1.0")
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

TELEMETRY_CONFIG = {
    "service_name": "mergexml",
    "version": "0.1.0",
    "tracer_name": "mergexml",
    "max_attribute_length": 500,  # For truncating long strings
}

# Span attribute keys
SPAN_ATTRIBUTES = {
    "FILE": {
        "path": "file.path",
        "name": "file.name",
        "exists": "file.exists",
    },
    "COLLECTION": {
        "location": "collection.location",
        "extension": "collection.extension",
        "min_count": "collection.min_count",
        "max_count": "collection.max_count",
        "count": "collection.count",
    },
    "VALIDATION": {
        "tag": "validation.tag",
        "expected": "validation.expected",
        "actual": "validation.actual",
    },
}


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def setup_telemetry(
    service_name: str = DEFAULT_SERVICE_NAME,
    service_version: str = DEFAULT_SERVICE_VERSION,
    environment: str = ENVIRONMENT,
    force_reinit: bool = False
) -> trace.Tracer:
    """
    Configure OpenTelemetry tracing with initialization guards.

    Exporters are picked from the environment:
    - OTEL_EXPORTER_OTLP_ENDPOINT: OTLP/HTTP endpoint
    - OTEL_EXPORTER_OTLP_HEADERS: comma separated key=value pairs
    - MERGEXML_CONSOLE_EXPORTER: "true" to print spans to stdout
    - ENABLE_OPENTELEMETRY: "false" leaves the global provider untouched

    Args:
        service_name: Name of the service
        service_version: Version of the service
        environment: Deployment environment label
        force_reinit: Force re-initialization even if already initialized

    Returns:
        trace.Tracer: the tracer used by @loggable
    """
    global _TELEMETRY_INITIALIZED, _TRACER_INSTANCE

    if _TELEMETRY_INITIALIZED and not force_reinit and _TRACER_INSTANCE is not None:
        return _TRACER_INSTANCE

    if not _env_flag("ENABLE_OPENTELEMETRY", "true"):
        log.info("[telemetry] OpenTelemetry disabled via ENABLE_OPENTELEMETRY=false")
        _TRACER_INSTANCE = trace.get_tracer(TELEMETRY_CONFIG["tracer_name"])
        _TELEMETRY_INITIALIZED = True
        return _TRACER_INSTANCE

    current_provider = trace.get_tracer_provider()
    if force_reinit or not isinstance(current_provider, TracerProvider):
        resource = Resource.create({
            SERVICE_NAME: service_name,
            SERVICE_VERSION: service_version,
            "environment": environment,
        })
        provider = TracerProvider(resource=resource)
        trace.set_tracer_provider(provider)

        otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        if otlp_endpoint:
            headers = {}
            for header_pair in os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "").split(","):
                if "=" in header_pair:
                    key, value = header_pair.strip().split("=", 1)
                    headers[key] = value
            otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, headers=headers, timeout=10)
            provider.add_span_processor(BatchSpanProcessor(otlp_exporter))
            log.info(f"[telemetry] OTLP exporter configured: {otlp_endpoint}")

        if _env_flag("MERGEXML_CONSOLE_EXPORTER"):
            provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
            log.info("[telemetry] Console exporter configured")
    else:
        log.info("[telemetry] TracerProvider already configured, reusing existing provider")

    _TRACER_INSTANCE = trace.get_tracer(TELEMETRY_CONFIG["tracer_name"])
    _TELEMETRY_INITIALIZED = True
    log.info(f"[telemetry] Tracer setup complete for service: {service_name}")
    return _TRACER_INSTANCE


def get_tracer() -> trace.Tracer:
    """
    Get the cached tracer instance.

    Before setup_telemetry() runs this is the global proxy tracer, so spans
    are no-ops until a provider is installed.
    """
    if _TRACER_INSTANCE is not None:
        return _TRACER_INSTANCE
    return trace.get_tracer(TELEMETRY_CONFIG["tracer_name"])


def get_telemetry_status() -> dict:
    """Get current telemetry configuration status."""
    return {
        "initialized": _TELEMETRY_INITIALIZED,
        "opentelemetry_enabled": _env_flag("ENABLE_OPENTELEMETRY", "true"),
        "console_exporter_enabled": _env_flag("MERGEXML_CONSOLE_EXPORTER"),
        "tracer_configured": _TRACER_INSTANCE is not None,
        "service_name": DEFAULT_SERVICE_NAME,
        "service_version": DEFAULT_SERVICE_VERSION,
        "environment": ENVIRONMENT,
        "otlp_endpoint": os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"),
        "provider_type": type(trace.get_tracer_provider()).__name__
    }


def set_file_span_attributes(span: Optional[trace.Span], path, exists: Optional[bool] = None):
    """Set file attributes on a span."""
    if span is None:
        return

    keys = SPAN_ATTRIBUTES["FILE"]
    span.set_attribute(keys["path"], str(path))
    span.set_attribute(keys["name"], os.path.basename(str(path)))
    if exists is not None:
        span.set_attribute(keys["exists"], exists)


def handle_span_error(span: Optional[trace.Span], exception: BaseException):
    """Handle errors in spans with proper exception recording."""
    if span is None:
        return

    span.record_exception(exception)
    span.set_status(Status(StatusCode.ERROR, str(exception)))


def handle_span_success(span: Optional[trace.Span], message_or_attributes=None):
    """Mark span as successful with optional message or attributes."""
    if span is None:
        return

    span.set_status(Status(StatusCode.OK))

    if message_or_attributes:
        if isinstance(message_or_attributes, str):
            span.add_event("success", {"message": message_or_attributes})
        elif isinstance(message_or_attributes, dict):
            sanitized_attrs = {}
            for key, value in message_or_attributes.items():
                if isinstance(value, (str, int, float, bool)):
                    sanitized_attrs[key] = value
                elif value is None:
                    sanitized_attrs[key] = "null"
                else:
                    sanitized_attrs[key] = str(value)
            span.add_event("success", sanitized_attrs)
        else:
            span.add_event("success", {"message": str(message_or_attributes)})


def _truncate(value: str) -> str:
    limit = TELEMETRY_CONFIG["max_attribute_length"]
    return value if len(value) <= limit else value[:limit] + "..."


def safe_set_span_attribute(span: Optional[trace.Span], key: str, value) -> None:
    """Safely set span attribute, handling complex types by serialization."""
    if span is None:
        return

    # OpenTelemetry accepts: str, bool, int, float, and sequences of these types
    if isinstance(value, str):
        span.set_attribute(key, _truncate(value))
    elif isinstance(value, (bool, int, float)):
        span.set_attribute(key, value)
    elif value is None:
        span.set_attribute(key, "null")
    elif isinstance(value, (list, tuple)):
        safe_list = []
        for item in value:
            if isinstance(item, (str, bool, int, float)):
                safe_list.append(item)
            else:
                safe_list.append(str(item))
        span.set_attribute(key, safe_list)
    elif isinstance(value, dict):
        try:
            span.set_attribute(key, _truncate(json.dumps(value)))
        except (TypeError, ValueError):
            span.set_attribute(key, _truncate(str(value)))
    else:
        span.set_attribute(key, _truncate(str(value)))


def safe_set_span_attributes(span: Optional[trace.Span], attributes: dict) -> None:
    """Safely set multiple span attributes at once."""
    if span is None or not attributes:
        return

    for key, value in attributes.items():
        safe_set_span_attribute(span, key, value)


def loggable(func: Callable) -> Callable:
    """
    Trace and log a call.

    Opens a span named ``<module>.<qualname>``, records the call arguments as
    span attributes and logs entry and exit at DEBUG. An exception is
    recorded on the span with ERROR status and re-raised unchanged.
    """
    span_name = f"{func.__module__}.{func.__qualname__}"
    func_log = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        with get_tracer().start_as_current_span(span_name, record_exception=False,
                                                set_status_on_exception=False) as span:
            for index, arg in enumerate(args):
                safe_set_span_attribute(span, f"args.{index}", arg)
            safe_set_span_attributes(span, {f"kwargs.{k}": v for k, v in kwargs.items()})
            func_log.debug(f"-> {func.__qualname__} args={args!r} kwargs={kwargs!r}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                handle_span_error(span, e)
                func_log.debug(f"<- {func.__qualname__} raised {type(e).__name__}: {e}")
                raise
            handle_span_success(span)
            func_log.debug(f"<- {func.__qualname__} returned {result!r}")
            return result

    return wrapper


def flush_telemetry_spans():
    """Force flush all pending spans to exporters."""
    current_tracer_provider = trace.get_tracer_provider()
    if hasattr(current_tracer_provider, 'force_flush'):
        current_tracer_provider.force_flush()
        log.debug("[telemetry] Spans flushed to exporters")
