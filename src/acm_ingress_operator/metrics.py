"""Prometheus metrics for the ACM Ingress Operator."""

from prometheus_client import Counter, Histogram

# Reconciliation metrics
reconcile_total = Counter(
    "acm_ingress_operator_reconcile_total",
    "Total number of reconciliations",
    ["kind", "result"],
)

reconcile_duration_seconds = Histogram(
    "acm_ingress_operator_reconcile_duration_seconds",
    "Duration of reconciliations in seconds",
    ["kind"],
    buckets=[0.1, 0.5, 1.0, 5.0, 30.0, 120.0, 600.0],
)

error_total = Counter(
    "acm_ingress_operator_error_total",
    "Total number of reconciliation errors",
    ["kind", "error_type"],
)

# Certificate lifecycle metrics
certificate_operations_total = Counter(
    "acm_ingress_operator_certificate_operations_total",
    "Total number of ACM certificate operations",
    ["operation", "result"],
)

validation_records_total = Counter(
    "acm_ingress_operator_validation_records_total",
    "Total number of Route 53 validation record upserts",
    ["result"],
)

validation_wait_seconds = Histogram(
    "acm_ingress_operator_validation_wait_seconds",
    "Time spent waiting for certificate issuance",
    buckets=[15.0, 30.0, 60.0, 120.0, 300.0, 600.0],
)

# API call metrics
api_call_total = Counter(
    "acm_ingress_operator_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "acm_ingress_operator_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)
