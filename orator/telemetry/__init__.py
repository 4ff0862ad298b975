"""Telemetry infrastructure (tracing, metrics)."""

from orator.telemetry.metrics import (
    record_conversation_ended,
    record_conversation_started,
    record_feedback_request,
    record_llm_request,
    record_turn,
    set_service_info,
)
from orator.telemetry.tracing import (
    configure_tracing,
    create_span,
    get_current_trace_id,
    get_tracer,
    instrument_httpx,
    shutdown_tracing,
)

__all__ = [
    # Tracing
    "configure_tracing",
    "get_tracer",
    "create_span",
    "get_current_trace_id",
    "instrument_httpx",
    "shutdown_tracing",
    # Metrics
    "set_service_info",
    "record_llm_request",
    "record_conversation_started",
    "record_conversation_ended",
    "record_turn",
    "record_feedback_request",
]
