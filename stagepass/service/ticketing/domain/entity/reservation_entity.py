from datetime import datetime, timezone
from typing import Optional

import attrs
import uuid_utils
from uuid_utils import UUID

from stagepass.platform.config.core_setting import settings
from stagepass.platform.exception.exceptions import InvalidRequestError
from stagepass.service.ticketing.domain.enum.reservation_status import ReservationStatus


@attrs.define
class ReservationEntity:
    id: UUID
    user_id: int
    concert_id: int
    num_tickets: int
    status: ReservationStatus = ReservationStatus.RESERVED
    reserved_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, user_id: int, concert_id: int, num_tickets: int) -> 'ReservationEntity':
        validate_quantity(num_tickets)
        return cls(
            id=uuid_utils.uuid7(),
            user_id=user_id,
            concert_id=concert_id,
            num_tickets=num_tickets,
            status=ReservationStatus.RESERVED,
            reserved_at=datetime.now(timezone.utc),
        )


def validate_quantity(num_tickets: object) -> int:
    # bool is an int subclass; `true` in a JSON body is not a ticket count
    if isinstance(num_tickets, bool) or not isinstance(num_tickets, int) or num_tickets < 1:
        raise InvalidRequestError('Ticket quantity must be a positive integer')
    if num_tickets > settings.MAX_TICKETS_PER_RESERVATION:
        raise InvalidRequestError(
            f'At most {settings.MAX_TICKETS_PER_RESERVATION} tickets per reservation'
        )
    return num_tickets
