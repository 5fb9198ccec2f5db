import asyncio
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect, WebSocketState

from care_relay.constants import WS_CLOSE_TIMEOUT_SECONDS, WS_GOING_AWAY_CODE
from care_relay.exceptions import UnknownConnectionError
from care_relay.logging import logger
from care_relay.utils.metrics import MetricsCollector


class WebSocketGateway:
    """
    Transport gateway backed by FastAPI WebSockets.

    Tracks open sockets by connection id for O(1) lookups and pushes
    outbound relay events to them. Sends are fire-and-forget: a socket
    that has gone away is logged and skipped, never reported to the
    sender.
    """

    def __init__(self) -> None:
        """
        Initializes a new instance of the `WebSocketGateway` class.

        The `connections` attribute is a dict mapping connection ids to
        open WebSocket connections.
        """
        self.connections: dict[str, WebSocket] = {}

    def attach(self, connection_id: str, websocket: WebSocket) -> None:
        """
        Start tracking an accepted WebSocket.

        Args:
            connection_id: Unique identifier assigned to this session.
            websocket: The accepted WebSocket connection.
        """
        self.connections[connection_id] = websocket
        logger.debug(
            f"websocket object ({id(websocket)}) attached as {connection_id}"
        )

    def detach(self, connection_id: str) -> None:
        """
        Stop tracking a WebSocket. Unknown ids are ignored.

        Args:
            connection_id: The connection id to remove.
        """
        websocket = self.connections.pop(connection_id, None)
        if websocket is None:
            return

        logger.debug(
            f"websocket object ({id(websocket)}) detached from {connection_id}"
        )

    def get_connection(self, connection_id: str) -> WebSocket:
        """
        Get the WebSocket for a connection id.

        Args:
            connection_id: The connection id to look up.

        Returns:
            The open WebSocket.

        Raises:
            UnknownConnectionError: If no socket is attached under that id.
        """
        try:
            return self.connections[connection_id]
        except KeyError:
            raise UnknownConnectionError(connection_id) from None

    async def deliver(
        self, connection_id: str, event: str, payload: dict[str, Any]
    ) -> None:
        """
        Send one relay event to one connection.

        Args:
            connection_id: Target connection.
            event: Outbound event name.
            payload: JSON-serializable event body.
        """
        try:
            websocket = self.get_connection(connection_id)
            await websocket.send_json({"event": event, "data": payload})
        except UnknownConnectionError as e:
            # Closed between registry lookup and delivery
            logger.debug(f"Skipping {event}: {e}")
            return
        except (WebSocketDisconnect, ConnectionError, RuntimeError) as e:
            # WebSocketDisconnect: Client disconnected
            # ConnectionError: Network errors
            # RuntimeError: WebSocket in invalid state
            logger.warning(f"Failed to send {event} to {connection_id}: {e}")
            MetricsCollector.record_ws_send_failure()
            return
        except Exception as e:
            # Catch-all for unexpected send errors
            logger.warning(
                f"Unexpected error sending {event} to {connection_id}: {e}"
            )
            MetricsCollector.record_ws_send_failure()
            return

        MetricsCollector.record_ws_message_sent()

    async def close_all(self, code: int = WS_GOING_AWAY_CODE) -> None:
        """
        Close every open socket, used on application shutdown.

        Args:
            code: WebSocket close code sent to clients.
        """
        if not self.connections:
            return

        connections_snapshot = list(self.connections.items())

        async def safe_close(connection_id: str, websocket: WebSocket) -> None:
            if websocket.application_state == WebSocketState.DISCONNECTED:
                return
            try:
                await asyncio.wait_for(
                    websocket.close(code=code),
                    timeout=WS_CLOSE_TIMEOUT_SECONDS,
                )
            except (TimeoutError, ConnectionError, RuntimeError) as e:
                logger.warning(f"Failed to close {connection_id}: {e}")

        await asyncio.gather(
            *[safe_close(key, ws) for key, ws in connections_snapshot],
            return_exceptions=True,
        )
        logger.info(f"Closed {len(connections_snapshot)} websocket connections")

    def __len__(self) -> int:
        return len(self.connections)


websocket_gateway = WebSocketGateway()
