from datetime import datetime
from typing import Optional

import attrs

from stagepass.platform.exception.exceptions import InvalidRequestError


def _required(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidRequestError(f'{attribute.name} is required')


@attrs.define
class VenueEntity:
    name: str = attrs.field(validator=_required)
    address: str = attrs.field(validator=_required)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
