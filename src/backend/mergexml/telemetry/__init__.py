"""Telemetry and tracing utilities."""

from .tracing import (
    setup_telemetry,
    get_tracer,
    get_telemetry_status,
    loggable,
    set_file_span_attributes,
    handle_span_error,
    handle_span_success,
    safe_set_span_attribute,
    safe_set_span_attributes,
    flush_telemetry_spans,
    TELEMETRY_CONFIG,
    SPAN_ATTRIBUTES
)

__all__ = [
    # Core telemetry
    "setup_telemetry",
    "get_tracer",
    "get_telemetry_status",
    "flush_telemetry_spans",

    # Call aspect
    "loggable",

    # Span attribute helpers
    "set_file_span_attributes",
    "handle_span_error",
    "handle_span_success",
    "safe_set_span_attribute",
    "safe_set_span_attributes",

    # Configuration
    "TELEMETRY_CONFIG",
    "SPAN_ATTRIBUTES"
]
