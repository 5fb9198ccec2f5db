"""
Relay message variants.

A message is either a chat message or a profile disclosure. The variant is
chosen once, when the inbound event is parsed, and carried as the `kind`
tag from then on; nothing downstream inspects payload shape.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import Field, field_validator

from care_relay.schemas.base import CamelModel, IdentityId
from care_relay.schemas.roles import Role


class MessageKind(str, Enum):
    CHAT = "Chat"
    PROFILE_DISCLOSURE = "ProfileDisclosure"

    def __str__(self) -> str:
        return self.value


class BaseMessage(CamelModel):
    """
    Fields shared by every message kind.

    Attributes:
        sender_identity: External id of the sender.
        sender_display_name: Name shown to the recipient.
        recipient_identity: External id of the recipient.
        recipient_role: Pool the recipient identity belongs to.
    """

    sender_identity: IdentityId
    sender_display_name: str = ""
    recipient_identity: IdentityId
    recipient_role: Role

    @field_validator("recipient_role", mode="before")
    @classmethod
    def _resolve_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Role(value)
        return value


class ChatMessage(BaseMessage):
    kind: Literal[MessageKind.CHAT] = MessageKind.CHAT
    text: str

    def delivery_payload(self) -> dict[str, Any]:
        return MessageReceivedPayload(
            sender_identity=self.sender_identity,
            sender_display_name=self.sender_display_name,
            text=self.text,
        ).to_wire()


class ProfileDisclosureMessage(BaseMessage):
    """
    A provider's profile bundle shared with a seeker.

    The recipient is a seeker unless the sender says otherwise.
    """

    kind: Literal[MessageKind.PROFILE_DISCLOSURE] = (
        MessageKind.PROFILE_DISCLOSURE
    )
    recipient_role: Role = Role.SEEKER
    payload: dict[str, Any]

    def delivery_payload(self) -> dict[str, Any]:
        return ProfileReceivedPayload(
            sender_identity=self.sender_identity,
            sender_display_name=self.sender_display_name,
            payload=self.payload,
        ).to_wire()


Message = Annotated[
    Union[ChatMessage, ProfileDisclosureMessage],
    Field(discriminator="kind"),
]


class MessageReceivedPayload(CamelModel):
    """Body of a `message-received` delivery."""

    sender_identity: str
    sender_display_name: str
    text: str
    kind: MessageKind = MessageKind.CHAT


class ProfileReceivedPayload(CamelModel):
    """Body of a `profile-received` delivery."""

    sender_identity: str
    sender_display_name: str
    payload: dict[str, Any]
    kind: MessageKind = MessageKind.PROFILE_DISCLOSURE
