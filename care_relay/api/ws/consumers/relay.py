from fastapi import APIRouter

from care_relay.api.ws.websocket import RelayWebSocketEndpoint
from care_relay.logging import logger
from care_relay.settings import app_settings
from care_relay.utils.metrics import MetricsCollector

router = APIRouter()


@router.websocket_route(app_settings.WS_PATH)
class Relay(RelayWebSocketEndpoint):
    """
    WebSocket consumer for seekers and providers.

    Clients log in with the identity issued by the HTTP login flow, then
    exchange chat messages and profile disclosures. See
    care_relay.api.ws.constants for the event names.
    """

    async def on_receive(self, websocket, data: str | bytes):
        """
        Hand an inbound frame to the relay dispatcher.

        Nothing is sent back to the sender: messages to offline recipients
        are dropped silently and malformed frames are discarded.

        Args:
            websocket: The WebSocket connection instance
            data: Raw frame text or bytes
        """
        MetricsCollector.record_ws_message_received()

        result = await self.relay.dispatcher.dispatch(self.connection_id, data)
        if result is not None:
            logger.debug(f"Frame from {self.connection_id} {result.value}")
