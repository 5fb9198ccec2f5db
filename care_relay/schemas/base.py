from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _coerce_identity_id(value: Any) -> Any:
    # Account ids come from a relational store and may arrive as numbers
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


IdentityId = Annotated[
    str, BeforeValidator(_coerce_identity_id), Field(min_length=1)
]


class CamelModel(BaseModel):  # type: ignore[misc]
    """
    Base model for relay payloads.

    Fields are snake_case in Python and camelCase on the wire. Both spellings
    are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict:
        """Serialize with camelCase keys and JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)
