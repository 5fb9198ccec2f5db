from pydantic import Field, computed_field

from care_relay.schemas.base import CamelModel


class RelayStats(CamelModel):
    """
    Number of distinct identities currently bound, per role.

    Attributes:
        seeker_count: Bound seeker identities.
        provider_count: Bound provider identities.
    """

    seeker_count: int = Field(default=0, ge=0)
    provider_count: int = Field(default=0, ge=0)

    @computed_field(alias="totalCount")  # type: ignore[prop-decorator]
    @property
    def total_count(self) -> int:
        return self.seeker_count + self.provider_count
