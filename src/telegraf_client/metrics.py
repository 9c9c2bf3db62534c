"""
Prometheus metrics for the write client.

Registered in the global REGISTRY on import.
"""

from prometheus_client import Counter, Histogram

CLIENT_WRITES_TOTAL = Counter(
    "telegraf_client_writes_total",
    "Total number of write calls issued by the client",
    ["op", "status"],
)

CLIENT_POINTS_TOTAL = Counter(
    "telegraf_client_points_total",
    "Total number of points handed to the transport",
)

CLIENT_WRITE_LATENCY = Histogram(
    "telegraf_client_write_latency_seconds",
    "Transport write latency in seconds",
    ["op"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5],
)
