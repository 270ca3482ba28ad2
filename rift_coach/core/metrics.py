"""
Prometheus metrics for the analysis and coaching pipeline.

Metric definitions live here so instrumentation is not scattered across
modules. All metrics are registered on a private registry; expose them with
``render_latest()``.
"""

from __future__ import annotations

import contextlib

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ============================================================================
# Counters
# ============================================================================

rift_coach_matches_analyzed_total = Counter(
    "rift_coach_matches_analyzed_total",
    "Matches successfully turned into per-match metrics",
    registry=_registry,
)

rift_coach_matches_skipped_total = Counter(
    "rift_coach_matches_skipped_total",
    "Matches skipped during aggregation by reason",
    labelnames=("reason",),
    registry=_registry,
)

rift_coach_sessions_total = Counter(
    "rift_coach_sessions_total",
    "Coaching sessions by mode and status",
    labelnames=("mode", "status"),
    registry=_registry,
)

rift_coach_external_api_errors_total = Counter(
    "rift_coach_external_api_errors_total",
    "External API errors by service and error type",
    labelnames=("service", "error_type"),
    registry=_registry,
)

# ============================================================================
# Histograms
# ============================================================================

rift_coach_llm_latency_seconds = Histogram(
    "rift_coach_llm_latency_seconds",
    "LLM completion latency in seconds by provider",
    labelnames=("provider",),
    buckets=(0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0),
    registry=_registry,
)


# ============================================================================
# Helper Functions
# ============================================================================


def mark_match_analyzed() -> None:
    """Count one successfully analyzed match."""
    with contextlib.suppress(Exception):
        rift_coach_matches_analyzed_total.inc()


def mark_match_skipped(reason: str) -> None:
    """Count one skipped match.

    Args:
        reason: Skip reason (e.g., 'too_short', 'participant_not_found')
    """
    with contextlib.suppress(Exception):
        rift_coach_matches_skipped_total.labels(reason=reason).inc()


def mark_session(mode: str, status: str) -> None:
    """Mark a coaching session outcome.

    Args:
        mode: 'initial' or 'follow_up'
        status: 'success' or 'failed'
    """
    with contextlib.suppress(Exception):
        rift_coach_sessions_total.labels(mode=mode, status=status).inc()


def mark_riot_429() -> None:
    """Mark Riot API rate limit hit."""
    with contextlib.suppress(Exception):
        rift_coach_external_api_errors_total.labels(service="riot", error_type="429").inc()


def mark_external_error(service: str, error_type: str) -> None:
    """Mark a failed call to an external service."""
    with contextlib.suppress(Exception):
        rift_coach_external_api_errors_total.labels(service=service, error_type=error_type).inc()


def observe_llm_latency(provider: str, duration_seconds: float) -> None:
    """Observe LLM request latency.

    Args:
        provider: Provider name ('gemini', 'openai' or 'claude')
        duration_seconds: Request duration in seconds
    """
    with contextlib.suppress(Exception):
        rift_coach_llm_latency_seconds.labels(provider=provider).observe(duration_seconds)


def render_latest() -> tuple[bytes, str]:
    """Render latest metrics for Prometheus scraping.

    Returns:
        Tuple of (payload bytes, content_type string)
    """
    return (generate_latest(_registry), CONTENT_TYPE_LATEST)
