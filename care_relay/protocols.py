"""
Protocol classes for structural subtyping (duck typing with type safety).

The relay core depends only on these interfaces; the WebSocket
implementation lives in care_relay.managers.websocket_connection_manager.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TransportGateway(Protocol):
    """
    Protocol for the real-time connection layer.

    Any object that can push a named event to a connection id satisfies
    this protocol.
    """

    async def deliver(
        self, connection_id: str, event: str, payload: dict[str, Any]
    ) -> None:
        """
        Send one event to one connection, fire-and-forget.

        Implementations must not raise when the connection has already gone
        away; the relay offers best-effort delivery only.

        Args:
            connection_id: Target connection.
            event: Outbound event name.
            payload: JSON-serializable event body.
        """
        ...
