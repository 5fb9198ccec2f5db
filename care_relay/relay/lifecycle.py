from care_relay.logging import logger
from care_relay.relay.registry import Binding, ConnectionRegistry
from care_relay.schemas.stats import RelayStats
from care_relay.utils.metrics import MetricsCollector


class LifecycleManager:
    """
    Reacts to connections opening and closing.

    A connection starts unbound; only a login binds it. Closing a
    connection releases whatever it still owns and nothing else.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    def on_connection_established(self, connection_id: str) -> None:
        logger.debug(f"Connection {connection_id} established, unbound")

    def on_connection_closed(self, connection_id: str) -> Binding | None:
        """
        Release the binding owned by a closed connection.

        Args:
            connection_id: Connection reported closed by the transport.

        Returns:
            The removed binding, or None if the connection never logged in
            or had already been superseded.
        """
        binding = self.registry.unbind(connection_id)

        if binding is None:
            # Never logged in, or its identity moved to a newer connection
            logger.debug(f"Connection {connection_id} closed without binding")
        else:
            logger.info(
                f"{binding.role} {binding.identity_id} unbound "
                f"(connection {connection_id} closed)"
            )

        MetricsCollector.record_bindings(self.registry.stats())
        return binding

    def stats(self) -> RelayStats:
        """Current bound identity counts for health and stats endpoints."""
        return self.registry.stats()
