from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import attrs

from stagepass.platform.exception.exceptions import ForbiddenError, InvalidRequestError
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.domain.value_object.ticket_class import TicketClass


REQUIRED_TEXT_FIELDS = ('artist', 'tour', 'description', 'genre')


@attrs.define
class ConcertEntity:
    artist: str
    venue_id: Optional[int]
    tour: str
    starts_at: datetime
    description: str
    genre: str
    organizer: str
    tickets: TicketClass
    total_tickets: int
    rules: Optional[str] = None
    image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        artist: str,
        venue_id: int,
        tour: str,
        starts_at: datetime,
        description: str,
        genre: str,
        organizer: Identity,
        ticket_type: str,
        price: Decimal,
        num_avail: int,
        rules: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> 'ConcertEntity':
        if not organizer.organizer:
            raise ForbiddenError('Only organizers can create concerts')

        values = {'artist': artist, 'tour': tour, 'description': description, 'genre': genre}
        missing = [name for name in REQUIRED_TEXT_FIELDS if not (values[name] or '').strip()]
        if missing or not (ticket_type or '').strip():
            raise InvalidRequestError('Please provide all required fields.')

        tickets = TicketClass(type=ticket_type.strip(), price=price, num_avail=num_avail)
        return cls(
            artist=artist.strip(),
            venue_id=venue_id,
            tour=tour.strip(),
            starts_at=starts_at,
            description=description,
            genre=genre.strip(),
            organizer=organizer.username,
            tickets=tickets,
            # Allotment starts equal to the inventory on sale
            total_tickets=tickets.num_avail,
            rules=rules,
            image_url=image_url,
        )

    @staticmethod
    def clean_updates(values: dict[str, Any]) -> dict[str, Any]:
        """Apply the create-time text rules to a partial update."""
        cleaned = dict(values)
        for name in (*REQUIRED_TEXT_FIELDS, 'ticket_type'):
            if name not in cleaned:
                continue
            text = (cleaned[name] or '').strip()
            if not text:
                raise InvalidRequestError(f'{name} cannot be blank')
            # description keeps its formatting, like on create
            if name != 'description':
                cleaned[name] = text
        return cleaned

    @property
    def reserved_count(self) -> int:
        return self.total_tickets - self.tickets.num_avail

    def ensure_owned_by(self, identity: Identity) -> None:
        if not identity.organizer or self.organizer != identity.username:
            raise ForbiddenError('Only the organizer who created this concert can change it')

    def validate_allotment(self, total_tickets: int) -> None:
        if total_tickets < self.reserved_count:
            raise InvalidRequestError(
                f'Total tickets ({total_tickets}) cannot be lower than the '
                f'{self.reserved_count} already reserved'
            )
