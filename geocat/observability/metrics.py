"""
Metrics definitions for GeoCat.

This module defines Prometheus metrics for monitoring
authorization decisions, area queries and storage latency.
"""

from prometheus_client import Counter, Histogram

# 카운터 메트릭
policy_decisions = Counter(
    "policy_decisions_total",
    "Authorization policy decisions",
    ["kind", "action", "outcome"]
)

geo_queries = Counter(
    "geo_queries_total",
    "Bounding box queries by outcome",
    ["outcome"]
)

api_errors = Counter(
    "api_errors_total",
    "Errors returned at the HTTP boundary",
    ["error"]
)

# 히스토그램 메트릭
store_query_seconds = Histogram(
    "store_query_duration_seconds",
    "Time spent in resource store calls",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)
