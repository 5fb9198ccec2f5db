"""
In-memory index of which connection currently represents which identity.
"""

import threading
from dataclasses import dataclass

from care_relay.schemas.roles import Role
from care_relay.schemas.stats import RelayStats

IdentityKey = tuple[Role, str]


@dataclass(frozen=True)
class Binding:
    """
    Live association between a connection and an identity.

    Attributes:
        connection_id: Transport connection representing the identity.
        role: Identity pool.
        identity_id: External identity id.
    """

    connection_id: str
    role: Role
    identity_id: str

    @property
    def key(self) -> IdentityKey:
        return (self.role, self.identity_id)


@dataclass(frozen=True)
class RegistrySnapshot:
    """Consistent copy of both registry indices taken under the lock."""

    by_identity: dict[IdentityKey, str]
    by_connection: dict[str, IdentityKey]
    counts: dict[Role, int]


class ConnectionRegistry:
    """
    Bidirectional index between connections and (role, identity) pairs.

    Both indices and the per-role counters are only ever mutated together
    while holding one lock, so every operation is atomic with respect to
    every other one regardless of how many threads or tasks call in.

    Guarantees:
        - a connection is bound to at most one identity
        - an identity is bound to at most one connection; the latest
          `bind` wins
        - `unbind` only removes the identity entry that the unbinding
          connection still owns
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_identity: dict[IdentityKey, str] = {}
        self._by_connection: dict[str, IdentityKey] = {}
        self._counts: dict[Role, int] = {role: 0 for role in Role}

    def bind(
        self, connection_id: str, role: Role, identity_id: str
    ) -> str | None:
        """
        Bind a connection to an identity, replacing older bindings.

        If another connection currently represents the identity, that
        connection loses its binding (it stays open but becomes
        unaddressable). If this connection was bound to a different
        identity, that identity is released.

        Args:
            connection_id: Connection that asserted the identity.
            role: Identity pool.
            identity_id: External identity id.

        Returns:
            Id of the connection that was superseded, or None.
        """
        key = (role, identity_id)

        with self._lock:
            superseded = self._by_identity.get(key)
            if superseded == connection_id:
                return None

            if superseded is not None:
                del self._by_connection[superseded]
            else:
                self._counts[role] += 1

            previous_key = self._by_connection.get(connection_id)
            if previous_key is not None:
                del self._by_identity[previous_key]
                self._counts[previous_key[0]] -= 1

            self._by_identity[key] = connection_id
            self._by_connection[connection_id] = key

        return superseded

    def lookup(self, role: Role, identity_id: str) -> str | None:
        """
        Get the connection currently bound to an identity.

        Args:
            role: Identity pool.
            identity_id: External identity id.

        Returns:
            Connection id if the identity is bound, None otherwise.
        """
        with self._lock:
            return self._by_identity.get((role, identity_id))

    def binding_for(self, connection_id: str) -> Binding | None:
        """Get the binding owned by a connection, if any."""
        with self._lock:
            key = self._by_connection.get(connection_id)
        if key is None:
            return None
        return Binding(connection_id, *key)

    def unbind(self, connection_id: str) -> Binding | None:
        """
        Remove the binding owned by a connection.

        A connection that never logged in, or whose identity has since been
        claimed by a newer connection, owns nothing and this is a no-op for
        the identity index.

        Args:
            connection_id: Connection that closed.

        Returns:
            The binding that was removed, or None.
        """
        with self._lock:
            key = self._by_connection.pop(connection_id, None)
            if key is None:
                return None

            if self._by_identity.get(key) == connection_id:
                del self._by_identity[key]
                self._counts[key[0]] -= 1

        return Binding(connection_id, *key)

    def stats(self) -> RelayStats:
        """
        Count distinct bound identities per role.

        Returns:
            RelayStats with seeker and provider counts.
        """
        with self._lock:
            return RelayStats(
                seeker_count=self._counts[Role.SEEKER],
                provider_count=self._counts[Role.PROVIDER],
            )

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot(
                by_identity=dict(self._by_identity),
                by_connection=dict(self._by_connection),
                counts=dict(self._counts),
            )

    def clear(self) -> None:
        with self._lock:
            self._by_identity.clear()
            self._by_connection.clear()
            self._counts = {role: 0 for role in Role}

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_connection)
