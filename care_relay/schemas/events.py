"""
Inbound relay events.

Clients send JSON frames shaped as ``{"event": <name>, "data": {...}}``.
The event name selects one model of a closed union; everything else about
the frame is validated by pydantic.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from care_relay.api.ws.constants import InboundEvent
from care_relay.exceptions import MalformedEventError
from care_relay.schemas.base import CamelModel, IdentityId
from care_relay.schemas.messages import ChatMessage, ProfileDisclosureMessage
from care_relay.schemas.roles import Role


class LoginData(CamelModel):
    """
    Identity asserted by a client after the HTTP login flow.

    Attributes:
        role: Identity pool of the client.
        identity_id: External id issued by the login flow.
    """

    role: Role
    identity_id: IdentityId

    @field_validator("role", mode="before")
    @classmethod
    def _resolve_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Role(value)
        return value


class LoginEvent(BaseModel):  # type: ignore[misc]
    event: Literal[InboundEvent.LOGIN]
    data: LoginData


class ChatMessageEvent(BaseModel):  # type: ignore[misc]
    event: Literal[InboundEvent.CHAT_MESSAGE]
    data: ChatMessage


class ProfileDisclosureEvent(BaseModel):  # type: ignore[misc]
    event: Literal[InboundEvent.PROFILE_DISCLOSURE]
    data: ProfileDisclosureMessage


RelayEvent = Annotated[
    Union[LoginEvent, ChatMessageEvent, ProfileDisclosureEvent],
    Field(discriminator="event"),
]

relay_event_adapter: TypeAdapter[RelayEvent] = TypeAdapter(RelayEvent)


def parse_event(raw: str | bytes | dict[str, Any]) -> RelayEvent:
    """
    Parse a raw inbound frame into a typed relay event.

    Args:
        raw: Frame text, or an already-decoded JSON object.

    Returns:
        One of LoginEvent, ChatMessageEvent or ProfileDisclosureEvent.

    Raises:
        MalformedEventError: If the frame is not JSON, names an unknown
            event or is missing required fields.
    """
    if isinstance(raw, bytes):
        raise MalformedEventError("binary frames are not supported", raw)

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as ex:
            raise MalformedEventError(f"invalid JSON: {ex.msg}", raw) from ex

    if not isinstance(raw, dict):
        raise MalformedEventError("frame must be a JSON object", raw)

    try:
        return relay_event_adapter.validate_python(raw)
    except ValidationError as ex:
        reason = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in ex.errors()
        )
        raise MalformedEventError(reason, raw) from ex
