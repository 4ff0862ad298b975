"""Prometheus metrics configuration."""

from prometheus_client import Counter, Gauge, Histogram, Info

# Service info
SERVICE_INFO = Info("orator", "Orator conversation engine information")

# LLM backend metrics
LLM_REQUESTS_TOTAL = Counter(
    "llm_requests_total",
    "Total chat backend requests",
    ["provider", "model", "status"],  # status: success, empty, timeout, error
)

LLM_REQUEST_DURATION_SECONDS = Histogram(
    "llm_request_duration_seconds",
    "Chat backend latency in seconds",
    ["provider", "model"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

LLM_TOKENS_TOTAL = Counter(
    "llm_tokens_total",
    "Total LLM tokens used",
    ["provider", "model", "direction"],  # direction: input/output
)

# Conversation metrics
CONVERSATIONS_ACTIVE = Gauge(
    "conversations_active",
    "Number of started conversations that have not ended",
)

CONVERSATIONS_TOTAL = Counter(
    "conversations_total",
    "Total conversations started",
    ["scenario"],
)

CONVERSATION_TURNS_TOTAL = Counter(
    "conversation_turns_total",
    "Total user turns submitted",
    ["scenario"],
)

FEEDBACK_REQUESTS_TOTAL = Counter(
    "feedback_requests_total",
    "Total end-of-session feedback requests",
    ["scenario"],
)


def set_service_info(version: str, environment: str) -> None:
    """Set service information.

    Args:
        version: Package version
        environment: Deployment environment
    """
    SERVICE_INFO.info({
        "version": version,
        "environment": environment,
    })


def record_llm_request(
    provider: str,
    model: str,
    status: str,
    duration_seconds: float,
    tokens_in: int = 0,
    tokens_out: int = 0,
) -> None:
    """Record a chat backend request.

    Args:
        provider: LLM provider name
        model: Model name
        status: Request status
        duration_seconds: Request duration in seconds
        tokens_in: Input tokens
        tokens_out: Output tokens
    """
    LLM_REQUESTS_TOTAL.labels(
        provider=provider,
        model=model,
        status=status,
    ).inc()
    LLM_REQUEST_DURATION_SECONDS.labels(
        provider=provider,
        model=model,
    ).observe(duration_seconds)

    if tokens_in > 0:
        LLM_TOKENS_TOTAL.labels(
            provider=provider,
            model=model,
            direction="input",
        ).inc(tokens_in)

    if tokens_out > 0:
        LLM_TOKENS_TOTAL.labels(
            provider=provider,
            model=model,
            direction="output",
        ).inc(tokens_out)


def record_conversation_started(scenario: str) -> None:
    CONVERSATIONS_TOTAL.labels(scenario=scenario).inc()
    CONVERSATIONS_ACTIVE.inc()


def record_conversation_ended() -> None:
    CONVERSATIONS_ACTIVE.dec()


def record_turn(scenario: str) -> None:
    CONVERSATION_TURNS_TOTAL.labels(scenario=scenario).inc()


def record_feedback_request(scenario: str) -> None:
    FEEDBACK_REQUESTS_TOTAL.labels(scenario=scenario).inc()
