"""Prometheus metrics for identifier generation.

All metrics use the ``puid_`` prefix.  They register on the default
``prometheus_client`` registry, so any exporter the host process already
runs picks them up.
"""

from prometheus_client import Counter

IDS_GENERATED_TOTAL = Counter(
    "puid_ids_generated_total",
    "Total identifiers generated",
)

COUNTER_WRAPS_TOTAL = Counter(
    "puid_counter_wraps_total",
    "Times the 8-bit sequence counter wrapped back to zero",
)

REJECTIONS_TOTAL = Counter(
    "puid_rejections_total",
    "Generation requests rejected for invalid input",
    ["reason"],  # "prefix" | "entropy"
)
