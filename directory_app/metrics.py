from prometheus_client import Counter, Histogram, CollectorRegistry

# Dedicated registry so reloads and repeated imports do not collide
REGISTRY = CollectorRegistry(auto_describe=True)

STORE_REQUESTS = Counter(
    "store_requests_total",
    "Number of store requests",
    ["operation", "outcome"],
    registry=REGISTRY,
)

STORE_LATENCY = Histogram(
    "store_latency_seconds",
    "Latency of store requests in seconds",
    ["operation"],
    registry=REGISTRY,
)
