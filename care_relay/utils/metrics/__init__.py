"""
Prometheus metrics definitions and utilities.

Metrics are organized into submodules by subsystem (WebSocket transport,
relay routing) and re-exported here:

    from care_relay.utils.metrics import ws_connections_active

Code that emits metrics should go through the MetricsCollector facade:

    from care_relay.utils.metrics import MetricsCollector
    MetricsCollector.record_ws_message_received()
"""

from care_relay.utils.metrics._helpers import _get_or_create_gauge
from care_relay.utils.metrics.collector import MetricsCollector
from care_relay.utils.metrics.relay import (
    relay_bindings_active,
    relay_malformed_events_total,
    relay_messages_routed_total,
    relay_superseded_bindings_total,
)
from care_relay.utils.metrics.websocket import (
    get_active_websocket_connections,
    ws_connections_active,
    ws_connections_total,
    ws_messages_received_total,
    ws_messages_sent_total,
    ws_send_failures_total,
)

app_info = _get_or_create_gauge(
    "app_info",
    "Application information",
    ["version", "python_version", "environment"],
)

__all__ = [
    "MetricsCollector",
    # WebSocket metrics
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_send_failures_total",
    "get_active_websocket_connections",
    # Relay metrics
    "relay_bindings_active",
    "relay_messages_routed_total",
    "relay_malformed_events_total",
    "relay_superseded_bindings_total",
    # Application metrics
    "app_info",
]
