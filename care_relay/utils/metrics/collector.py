"""
Facade for centralized metrics emission.

Provides high-level methods for recording metrics without exposing
Prometheus implementation details to the rest of the codebase.
"""

from care_relay.schemas.stats import RelayStats


class MetricsCollector:
    """
    Centralized facade for all Prometheus metrics.

    All methods are static for easy use without instantiation.
    """

    # ========== WebSocket Metrics ==========

    @staticmethod
    def record_ws_connection_accepted() -> None:
        """Record accepted WebSocket connection."""
        from care_relay.utils.metrics import (
            ws_connections_active,
            ws_connections_total,
        )

        ws_connections_total.labels(status="accepted").inc()
        ws_connections_active.inc()

    @staticmethod
    def record_ws_disconnection() -> None:
        """Record WebSocket disconnection."""
        from care_relay.utils.metrics import (
            ws_connections_active,
            ws_connections_total,
        )

        ws_connections_total.labels(status="closed").inc()
        ws_connections_active.dec()

    @staticmethod
    def record_ws_message_received() -> None:
        from care_relay.utils.metrics import ws_messages_received_total

        ws_messages_received_total.inc()

    @staticmethod
    def record_ws_message_sent() -> None:
        from care_relay.utils.metrics import ws_messages_sent_total

        ws_messages_sent_total.inc()

    @staticmethod
    def record_ws_send_failure() -> None:
        from care_relay.utils.metrics import ws_send_failures_total

        ws_send_failures_total.inc()

    # ========== Relay Metrics ==========

    @staticmethod
    def record_bindings(stats: RelayStats) -> None:
        """
        Publish current binding counts.

        Args:
            stats: Counts taken from the connection registry.
        """
        from care_relay.utils.metrics import relay_bindings_active

        relay_bindings_active.labels(role="seeker").set(stats.seeker_count)
        relay_bindings_active.labels(role="provider").set(
            stats.provider_count
        )

    @staticmethod
    def record_binding_superseded() -> None:
        from care_relay.utils.metrics import relay_superseded_bindings_total

        relay_superseded_bindings_total.inc()

    @staticmethod
    def record_message_routed(kind: str, outcome: str) -> None:
        """
        Record a routing decision.

        Args:
            kind: 'Chat' or 'ProfileDisclosure'
            outcome: 'delivered' or 'dropped'
        """
        from care_relay.utils.metrics import relay_messages_routed_total

        relay_messages_routed_total.labels(kind=kind, outcome=outcome).inc()

    @staticmethod
    def record_malformed_event() -> None:
        from care_relay.utils.metrics import relay_malformed_events_total

        relay_malformed_events_total.inc()
