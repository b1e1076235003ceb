"""Prometheus metrics for the DRIP faucet.

Metrics:
- drip_mint_requests_total: Counter of mint requests by outcome
- drip_tokens_minted_total: Counter of units minted by denomination
- drip_key_publishes_total: Counter of faucet key publications by outcome
- drip_request_duration_seconds: Histogram of message handling duration
"""

from prometheus_client import Counter, Histogram

# Counters
MINT_REQUESTS = Counter(
    "drip_mint_requests_total",
    "Total number of mint requests",
    ["status"],
)

TOKENS_MINTED = Counter(
    "drip_tokens_minted_total",
    "Total units minted and sent",
    ["denom"],
)

KEY_PUBLISHES = Counter(
    "drip_key_publishes_total",
    "Total faucet key publications",
    ["status"],
)

# Histograms
REQUEST_DURATION = Histogram(
    "drip_request_duration_seconds",
    "Message handling duration",
    ["msg_type"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)
