from care_relay.managers.websocket_connection_manager import websocket_gateway
from care_relay.protocols import TransportGateway
from care_relay.relay.binder import SessionBinder
from care_relay.relay.dispatcher import EventDispatcher
from care_relay.relay.lifecycle import LifecycleManager
from care_relay.relay.registry import ConnectionRegistry
from care_relay.relay.router import MessageRouter


class RelayService:
    """
    Wires the relay components around one connection registry.

    Every component receives the registry it works on; nothing reaches for
    shared module state. Tests build their own instance with a fake
    transport.
    """

    def __init__(
        self,
        transport: TransportGateway,
        registry: ConnectionRegistry | None = None,
    ) -> None:
        self.transport = transport
        self.registry = registry or ConnectionRegistry()
        self.binder = SessionBinder(self.registry)
        self.router = MessageRouter(self.registry, transport)
        self.lifecycle = LifecycleManager(self.registry)
        self.dispatcher = EventDispatcher(self.binder, self.router)


relay_service = RelayService(transport=websocket_gateway)
