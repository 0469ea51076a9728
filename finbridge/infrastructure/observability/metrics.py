"""Prometheus metrics for score outcomes, assessments and storage health"""

from prometheus_client import Counter, Histogram

# Scoring metrics
score_calculation_counter = Counter(
    "finbridge_score_calculations_total",
    "Financial health score calculations",
    ["outcome"],  # success | failure
)

overall_score_band_counter = Counter(
    "finbridge_overall_score_band",
    "Calculated overall scores by resilience band",
    ["band"],  # high | medium | low
)

# Personality metrics
assessment_counter = Counter(
    "finbridge_assessments_total",
    "Completed personality assessments",
    ["personality_type"],
)

challenge_progress_counter = Counter(
    "finbridge_challenge_progress_updates_total",
    "Challenge progress updates by resulting status",
    ["status"],
)

# Storage metrics
storage_failures_counter = Counter(
    "finbridge_storage_failures_total",
    "Failed reads or writes against the database",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(overall_score: int) -> None:
    """Record a successful calculation and bucket the score for distribution analysis"""
    score_calculation_counter.labels(outcome="success").inc()

    if overall_score >= 80:
        band = "high"
    elif overall_score >= 60:
        band = "medium"
    else:
        band = "low"

    overall_score_band_counter.labels(band=band).inc()


def record_score_failure() -> None:
    score_calculation_counter.labels(outcome="failure").inc()
