"""
Application-level constants for hardcoded relay behavior.

These values represent protocol details and safety limits that should NEVER
be changed via environment variables or configuration.

For configurable values (log level, endpoints, toggles), see
care_relay/settings.py where values can be overridden via environment
variables.
"""

# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# WebSocket close code sent to clients when the server shuts down
# (RFC 6455 "going away")
WS_GOING_AWAY_CODE = 1001

# Timeout (seconds) when closing WebSocket connections gracefully
# Ensures connections don't hang indefinitely during shutdown
WS_CLOSE_TIMEOUT_SECONDS = 5

# Number of leading characters of a connection id shown in log lines
CONNECTION_ID_LOG_LENGTH = 8


# ============================================================================
# Logging
# ============================================================================

# Loki rejects log lines above this size; longer messages are truncated
LOKI_MAX_LOG_SIZE_BYTES = 256 * 1024
