"""
Custom exception classes for the relay.

None of these are fatal: each one is handled at the boundary where it is
raised and degrades to "message not delivered".
"""


class RelayError(Exception):
    """
    Base class for relay errors.
    """

    pass


class MalformedEventError(RelayError):
    """
    Inbound event could not be parsed.

    Raised when a frame is not JSON, names an unknown event, or is missing
    required fields. The dispatcher logs and discards the frame.
    """

    def __init__(self, reason: str, raw: object = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.raw = raw


class UnknownConnectionError(RelayError):
    """
    Transport has no open socket for a connection id.

    Raised by the gateway when asked for a connection that already closed.
    """

    def __init__(self, connection_id: str) -> None:
        super().__init__(f"No open connection with id {connection_id}")
        self.connection_id = connection_id
