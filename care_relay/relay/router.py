from enum import Enum

from care_relay.api.ws.constants import OutboundEvent
from care_relay.logging import logger
from care_relay.protocols import TransportGateway
from care_relay.relay.registry import ConnectionRegistry
from care_relay.schemas.messages import Message, MessageKind
from care_relay.utils.metrics import MetricsCollector

EVENT_NAMES: dict[MessageKind, OutboundEvent] = {
    MessageKind.CHAT: OutboundEvent.MESSAGE_RECEIVED,
    MessageKind.PROFILE_DISCLOSURE: OutboundEvent.PROFILE_RECEIVED,
}


class RouteResult(str, Enum):
    DELIVERED = "delivered"
    DROPPED = "dropped"


def event_name_for(kind: MessageKind) -> OutboundEvent:
    """Outbound event name a message kind is delivered under."""
    return EVENT_NAMES[kind]


class MessageRouter:
    """
    Routes messages to the connection currently bound to the recipient.

    Delivery is best-effort and at-most-once: a recipient without a live
    binding simply does not get the message. Routing never changes the
    registry.
    """

    def __init__(
        self, registry: ConnectionRegistry, transport: TransportGateway
    ) -> None:
        self.registry = registry
        self.transport = transport

    async def route(self, message: Message) -> RouteResult:
        """
        Hand a message to the transport if its recipient is online.

        Args:
            message: Chat message or profile disclosure.

        Returns:
            RouteResult.DELIVERED if the transport was called,
            RouteResult.DROPPED if the recipient has no live connection.
        """
        connection_id = self.registry.lookup(
            message.recipient_role, message.recipient_identity
        )

        if connection_id is None:
            logger.debug(
                f"{message.kind} from {message.sender_identity} dropped: "
                f"{message.recipient_role} {message.recipient_identity} "
                "is not connected"
            )
            MetricsCollector.record_message_routed(
                message.kind.value, RouteResult.DROPPED.value
            )
            return RouteResult.DROPPED

        await self.transport.deliver(
            connection_id,
            event_name_for(message.kind).value,
            message.delivery_payload(),
        )
        logger.debug(
            f"{message.kind} from {message.sender_identity} handed to "
            f"{message.recipient_role} {message.recipient_identity}"
        )
        MetricsCollector.record_message_routed(
            message.kind.value, RouteResult.DELIVERED.value
        )
        return RouteResult.DELIVERED
