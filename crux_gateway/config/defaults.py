"""crux_gateway.config.defaults
============================

Central place for small, stable default values used across the gateway
client. They can be overridden via environment variables, a config file or
constructor arguments, but provide sensible fallbacks for local development
and tests.

This module intentionally imports nothing from the rest of the package to
avoid circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Gateway endpoint ----
OPENROUTER_DEFAULT_MODEL = "openrouter/auto"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

# ---- Timeouts (seconds) ----
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
# Bound on the gap between two SSE frames of an open stream.
DEFAULT_STREAM_IDLE_TIMEOUT_SECONDS = 120.0

# ---- Retry policy ----
DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY_SECONDS = 1.0
DEFAULT_MAX_DELAY_SECONDS = 30.0
DEFAULT_BACKOFF_MULTIPLIER = 2.0
DEFAULT_USE_JITTER = True
# Uniform jitter band applied around the computed backoff delay.
JITTER_LOW = 0.75
JITTER_HIGH = 1.25

# ---- Stream accumulation ----
# Highest tool-call index merged from a stream; larger indices are dropped
# so one hostile delta cannot back-fill an unbounded accumulator list.
MAX_TOOL_CALL_INDEX = 1024
