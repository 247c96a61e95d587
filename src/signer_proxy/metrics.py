from prometheus_client import Counter, Histogram

SIGN_REQUESTS_TOTAL = Counter("signer_proxy_sign_requests_total",
                              "Inbound /sign requests by outcome", ["result"])
UPSTREAM_SIGN_LAT = Histogram("signer_proxy_upstream_sign_latency_seconds",
                              "Round trip of the forwarded eth_sign call (s)",
                              buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10))
UPSTREAM_STATUS_TOTAL = Counter("signer_proxy_upstream_status_total",
                                "HTTP status codes relayed from web3signer", ["code"])
HEALTH_CHECKS_TOTAL = Counter("signer_proxy_health_checks_total",
                              "Liveness probes relayed to /upcheck", ["result"])
