import uuid
from typing import Any

from starlette.endpoints import WebSocketEndpoint
from starlette.websockets import WebSocket

from care_relay.logging import clear_log_context, logger, set_log_context
from care_relay.managers.websocket_connection_manager import (
    WebSocketGateway,
    websocket_gateway,
)
from care_relay.relay.service import RelayService, relay_service
from care_relay.utils.metrics import MetricsCollector


class RelayWebSocketEndpoint(WebSocketEndpoint):  # type: ignore[misc]
    """
    WebSocket endpoint that turns socket lifecycle into relay signals.

    Every accepted socket gets a fresh connection id and is attached to the
    gateway; closing the socket releases whatever identity it still
    represents. Subclasses implement `on_receive` for inbound frames.

    Identity is not established here. A socket is anonymous until the
    client sends a `login` event.
    """

    encoding = None  # Frames are parsed by the relay, not by Starlette
    relay: RelayService = relay_service
    gateway: WebSocketGateway = websocket_gateway

    async def decode(
        self, websocket: WebSocket, message: dict[str, Any]
    ) -> str | bytes:
        """
        Return the raw frame without decoding.

        Malformed frames must not close the socket, so JSON parsing is left
        to the relay's event parser.

        Args:
            websocket: WebSocket connection instance
            message: Raw message dict from WebSocket

        Returns:
            Frame text, or bytes for binary frames.
        """
        if message.get("text") is not None:
            return message["text"]
        return message.get("bytes") or b""

    async def on_connect(self, websocket):  # type: ignore[no-untyped-def]
        """
        Accept the socket and announce the new connection.

        This method performs the following tasks:
        1. Accepts the WebSocket handshake
        2. Generates a unique connection id
        3. Attaches the socket to the transport gateway
        4. Emits the `established` signal to the lifecycle manager
        """
        await super().on_connect(websocket)

        self.connection_id = str(uuid.uuid4())

        clear_log_context()
        set_log_context(connection_id=self.connection_id)

        self.gateway.attach(self.connection_id, websocket)
        self.relay.lifecycle.on_connection_established(self.connection_id)

        MetricsCollector.record_ws_connection_accepted()
        logger.debug(
            f"Client connected to websocket (connection_id: {self.connection_id})"
        )

    async def on_disconnect(self, websocket, close_code):  # type: ignore[no-untyped-def]
        """
        Emit the `closed` signal and forget the socket.

        The registry is updated before the socket is detached so no message
        is routed to a connection the gateway no longer holds.
        """
        await super().on_disconnect(websocket, close_code)

        connection_id = getattr(self, "connection_id", None)
        if connection_id is None:
            return

        self.relay.lifecycle.on_connection_closed(connection_id)
        self.gateway.detach(connection_id)

        MetricsCollector.record_ws_disconnection()
        logger.debug(
            f"Client {connection_id} disconnected with code {close_code}"
        )
        clear_log_context()
