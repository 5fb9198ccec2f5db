from enum import Enum


class InboundEvent(str, Enum):
    """
    Event names a client may send over the relay socket.

    Attributes:
        LOGIN: Bind this connection to an already-authenticated identity
        CHAT_MESSAGE: Text message for a seeker or a provider
        PROFILE_DISCLOSURE: Provider shares a profile bundle with a seeker
    """

    LOGIN = "login"
    CHAT_MESSAGE = "chat-message"
    PROFILE_DISCLOSURE = "profile-disclosure"

    def __str__(self) -> str:
        return self.value


class OutboundEvent(str, Enum):
    """
    Event names the relay delivers to a recipient's connection.

    Attributes:
        MESSAGE_RECEIVED: A chat message arrived
        PROFILE_RECEIVED: A provider disclosed its profile
    """

    MESSAGE_RECEIVED = "message-received"
    PROFILE_RECEIVED = "profile-received"

    def __str__(self) -> str:
        return self.value
