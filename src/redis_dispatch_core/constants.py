"""Shared constants for redis-dispatch."""

from __future__ import annotations

# Every write carries the same expiry (5 minutes)
DEFAULT_TTL_SECONDS = 300

# Deadline applied by the timeout guard
DEFAULT_TIMEOUT_SECONDS = 30.0

# Bounded pool capacity
POOL_SIZE = 3

DEFAULT_REDIS_URL = "redis://127.0.0.1"

# Values are unsigned 64-bit integers
U64_MAX = 2**64 - 1

# Command names issued by the cache layer
GET_COMMAND = "GET"
SET_COMMAND = "SET"
EXPIRY_OPTION = "EX"
