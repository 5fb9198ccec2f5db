from enum import Enum

# Role names sent by the legacy front end before the seeker/provider rename
LEGACY_ROLE_ALIASES = {
    "user": "seeker",
    "professional": "provider",
}


class Role(str, Enum):
    """
    The two disjoint identity pools served by the relay.

    Attributes:
        SEEKER: A person (or family) looking for care
        PROVIDER: A care professional
    """

    SEEKER = "seeker"
    PROVIDER = "provider"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value: object) -> "Role | None":
        """Resolve legacy and differently-cased role names."""
        if not isinstance(value, str):
            return None
        name = value.strip().lower()
        name = LEGACY_ROLE_ALIASES.get(name, name)
        for member in cls:
            if member.value == name:
                return member
        return None
