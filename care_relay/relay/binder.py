from care_relay.logging import logger
from care_relay.relay.registry import ConnectionRegistry
from care_relay.schemas.roles import Role
from care_relay.utils.metrics import MetricsCollector


class SessionBinder:
    """
    Binds connections to identities when a login is asserted.

    The identity is trusted as-is: the HTTP login flow has already
    authenticated the client before it connects to the relay.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    def on_login(
        self, connection_id: str, role: Role, identity_id: str
    ) -> str | None:
        """
        Bind a connection to the asserted identity.

        A newer login for an identity wins; the connection that previously
        represented it stays open but no longer receives messages.

        Args:
            connection_id: Connection the login arrived on.
            role: Asserted identity pool.
            identity_id: Asserted identity id.

        Returns:
            Id of the superseded connection, or None.
        """
        superseded = self.registry.bind(connection_id, role, identity_id)

        if superseded is not None:
            logger.info(
                f"{role} {identity_id} moved from connection {superseded} "
                f"to {connection_id}"
            )
            MetricsCollector.record_binding_superseded()
        else:
            logger.info(f"{role} {identity_id} bound to {connection_id}")

        MetricsCollector.record_bindings(self.registry.stats())
        return superseded
