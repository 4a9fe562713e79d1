"""
Default configuration for quote-processor.

This file acts as the worker control plane:
- which broker transport to use
- channel names
- pricing knobs

Workers should READ from this config but never mutate it.
"""

DEFAULT_CONFIG = {
    # ------------------------------------------------------------------
    # Broker transport
    # ------------------------------------------------------------------
    "broker": {
        "backend": "redis",  # memory | redis
        "redis_url": "redis://localhost:6379/0",
        "poll_timeout_s": 1.0,
    },
    "channels": {
        "requests": "quote-requests",
        "results": "quotes",
    },
    # ------------------------------------------------------------------
    # Default pricing (LengthBasedPricing)
    # ------------------------------------------------------------------
    "pricing": {
        "unit_price": 100,  # per character of subject
        "min_factor": 0.5,
        "max_factor": 1.5,
    },
}
