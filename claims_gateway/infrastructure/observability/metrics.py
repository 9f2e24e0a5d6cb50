"""Prometheus metrics for monitoring claim evaluations, escalations and registry lookups"""

from prometheus_client import Counter, Histogram

# Evaluation metrics
claims_evaluated_counter = Counter(
    "claims_evaluated_total",
    "Claim workflow evaluations by resulting stage",
    ["stage"],
)

viability_counter = Counter(
    "claims_viability_total",
    "Viability assessments by outcome",
    ["outcome"],  # viable | warning
)

failed_check_counter = Counter(
    "claims_failed_checks_total",
    "Failed viability checks by check",
    ["check"],  # limitation | value | solvency
)

escalation_counter = Counter(
    "claims_escalations_total",
    "Evaluations that raised an escalation warning",
    ["urgency"],
)

claim_value_bucket_counter = Counter(
    "claims_value_bucket",
    "Evaluated claims by total claim value",
    ["bucket"],  # <=£1k, £1k-£10k, £10k-£200k, £200k+
)

# Companies House metrics
registry_latency_histogram = Histogram(
    "companies_house_latency_seconds",
    "Companies House API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

registry_failure_counter = Counter(
    "companies_house_failures_total",
    "Failed Companies House API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_workflow(stage: str, auto_escalate: bool, urgency: str) -> None:
    """Record stage distribution and escalations"""
    claims_evaluated_counter.labels(stage=stage).inc()
    if auto_escalate:
        escalation_counter.labels(urgency=urgency).inc()


def record_assessment(is_viable: bool, failed_checks: list[str]) -> None:
    """Record viability outcome and which checks failed"""
    outcome = "viable" if is_viable else "warning"
    viability_counter.labels(outcome=outcome).inc()
    for check in failed_checks:
        failed_check_counter.labels(check=check).inc()


def record_claim_value(total_claim_value: float) -> None:
    """Bucket claim values along the court fee schedule"""
    if total_claim_value <= 1_000:
        bucket = "<=£1k"
    elif total_claim_value <= 10_000:
        bucket = "£1k-£10k"
    elif total_claim_value <= 200_000:
        bucket = "£10k-£200k"
    else:
        bucket = "£200k+"

    claim_value_bucket_counter.labels(bucket=bucket).inc()
