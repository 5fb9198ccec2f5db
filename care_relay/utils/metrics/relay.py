"""
Prometheus metrics for identity bindings and message routing.
"""

from care_relay.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_gauge,
)

relay_bindings_active = _get_or_create_gauge(
    "relay_bindings_active",
    "Identities currently bound to a live connection",
    ["role"],  # seeker, provider
)

relay_messages_routed_total = _get_or_create_counter(
    "relay_messages_routed_total",
    "Messages handled by the router",
    ["kind", "outcome"],  # outcome: delivered, dropped
)

relay_malformed_events_total = _get_or_create_counter(
    "relay_malformed_events_total",
    "Inbound frames discarded because they could not be parsed",
)

relay_superseded_bindings_total = _get_or_create_counter(
    "relay_superseded_bindings_total",
    "Logins that took an identity over from another open connection",
)

__all__ = [
    "relay_bindings_active",
    "relay_messages_routed_total",
    "relay_malformed_events_total",
    "relay_superseded_bindings_total",
]
