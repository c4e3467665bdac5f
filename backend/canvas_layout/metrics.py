from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

LAYOUT_LATENCY = Histogram(
    "canvas_layout_operation_seconds",
    "Duration of layout computations served over HTTP",
    ["operation"],
)

NODES_SHARED_TOTAL = Counter(
    "canvas_layout_nodes_shared_total",
    "Count of nodes copied into another board",
)


def metrics_endpoint():
    """FastAPI route handler for /metrics (scraped by Prometheus)."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
