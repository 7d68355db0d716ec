from __future__ import annotations

# Fixed AMO policy, not configurable.

# Upload validation polling
VALIDATION_POLL_INTERVAL_SECONDS = 1.0
VALIDATION_TIMEOUT_SECONDS = 5 * 60.0

# Lifetime of each signed API token
TOKEN_LIFETIME_SECONDS = 5 * 60
