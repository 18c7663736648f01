import attrs


@attrs.define(frozen=True)
class Identity:
    """Verified caller, rebuilt from the bearer token without a DB query."""

    id: int
    username: str
    organizer: bool = False
