from prometheus_client import Counter, Gauge, Histogram

# Request-level metrics
REQUESTS_TOTAL = Counter(
    "trail_service_requests_total",
    "Total HTTP requests",
    labelnames=("method", "path", "status", "auth"),
)

REQUEST_LATENCY_MS = Histogram(
    "trail_service_request_latency_ms",
    "Request latency in milliseconds",
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2000, float("inf")),
    labelnames=("method", "path"),
)

REQUEST_ERRORS_TOTAL = Counter(
    "trail_service_request_errors_total",
    "Total HTTP requests resulting in error",
    labelnames=("method", "path", "status"),
)

# Catalogue gauges
TRAILS_KNOWN = Gauge("trail_service_trails_known", "Number of trails stored")
DATASOURCE_INFO = Gauge(
    "trail_service_datasource_info",
    "Resolved datasource (always 1; labels carry the detail)",
    labelnames=("driver", "profile", "policy"),
)
