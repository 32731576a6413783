"""Prometheus metrics definitions for framehost.

Tracks instance lifecycle and dispatch outcomes. Metrics are process-wide;
several runtimes in one process share them.
"""

from prometheus_client import Counter, Gauge

# =============================================================================
# Instance Metrics
# =============================================================================

INSTANCES_CREATED_TOTAL = Counter(
    "framehost_instances_created_total",
    "Total instances created",
    ["framework"],
)

INSTANCES_LIVE = Gauge(
    "framehost_instances_live",
    "Number of live instances",
)

FRAMEWORK_FALLBACK_TOTAL = Counter(
    "framehost_framework_fallback_total",
    "Instances bound to the default framework because the bundle declared none or an unknown one",
)

# =============================================================================
# Dispatch Metrics
# =============================================================================

DISPATCH_TOTAL = Counter(
    "framehost_dispatch_total",
    "Total public method calls",
    ["method", "result"],  # result: ok, error
)
