from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, StrictInt, field_validator

from stagepass.platform.exception.exceptions import StorageError
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    MAX_INT32,
    CamelModel,
    Money,
    RecordId,
    ensure_utc,
)


class TicketClassRequest(CamelModel):
    type: str = Field(..., min_length=1, max_length=100)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    num_avail: StrictInt = Field(..., ge=0, le=MAX_INT32)


class TicketClassUpdateRequest(CamelModel):
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    total_tickets: Optional[StrictInt] = Field(None, ge=0, le=MAX_INT32)


class ConcertCreateRequest(CamelModel):
    artist: str = Field(..., min_length=1, max_length=255)
    venue_id: RecordId
    tour: str = Field(..., min_length=1, max_length=255)
    starts_at: datetime
    description: str = Field(..., min_length=1)
    genre: str = Field(..., min_length=1, max_length=100)
    tickets: TicketClassRequest
    rules: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator('starts_at')
    @classmethod
    def starts_at_as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    model_config = CamelModel.model_config | {
        'json_schema_extra': {
            'example': {
                'artist': 'Phoebe Bridgers',
                'venueId': 1,
                'tour': 'Reunion Tour',
                'startsAt': '2026-11-20T20:00:00Z',
                'description': 'One night only',
                'genre': 'Indie',
                'rules': 'No re-entry',
                'tickets': {'type': 'General Admission', 'price': 59.5, 'numAvail': 500},
            }
        }
    }


class ConcertUpdateRequest(CamelModel):
    """Partial update: omitted fields are left unchanged."""

    artist: Optional[str] = Field(None, min_length=1, max_length=255)
    venue_id: Optional[RecordId] = None
    tour: Optional[str] = Field(None, min_length=1, max_length=255)
    starts_at: Optional[datetime] = None
    description: Optional[str] = Field(None, min_length=1)
    genre: Optional[str] = Field(None, min_length=1, max_length=100)
    rules: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    tickets: Optional[TicketClassUpdateRequest] = None

    @field_validator('starts_at')
    @classmethod
    def starts_at_as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    def to_field_values(self) -> dict:
        values = self.model_dump(exclude_unset=True, exclude={'tickets'})
        for required in ('artist', 'tour', 'description', 'genre', 'starts_at', 'venue_id'):
            if required in values and values[required] is None:
                values.pop(required)
        if self.tickets is not None:
            if self.tickets.type is not None:
                values['ticket_type'] = self.tickets.type
            if self.tickets.price is not None:
                values['price'] = self.tickets.price
        return values


class TicketClassResponse(CamelModel):
    type: str
    price: Money
    num_avail: int
    total_tickets: int


class ConcertResponse(CamelModel):
    id: int
    artist: str
    venue_id: Optional[int]
    venue_name: Optional[str]
    venue_address: Optional[str]
    venue_available: bool
    tour: str
    starts_at: datetime
    date: str
    time: str
    description: str
    genre: str
    rules: Optional[str]
    organizer: str
    image_url: Optional[str]
    tickets: TicketClassResponse

    @classmethod
    def from_read_model(cls, item: ConcertWithVenue) -> 'ConcertResponse':
        concert = item.concert
        if concert.id is None:
            raise StorageError('Concert row has no id')
        return cls(
            id=concert.id,
            artist=concert.artist,
            venue_id=concert.venue_id,
            venue_name=item.venue_name,
            venue_address=item.venue_address,
            venue_available=item.venue_available,
            tour=concert.tour,
            starts_at=concert.starts_at,
            date=concert.starts_at.date().isoformat(),
            time=concert.starts_at.strftime('%H:%M'),
            description=concert.description,
            genre=concert.genre,
            rules=concert.rules,
            organizer=concert.organizer,
            image_url=concert.image_url,
            tickets=TicketClassResponse(
                type=concert.tickets.type,
                price=concert.tickets.price,
                num_avail=concert.tickets.num_avail,
                total_tickets=concert.total_tickets,
            ),
        )


class ConcertCreatedResponse(CamelModel):
    message: str = 'Concert created successfully!'
    concert: ConcertResponse


class ConcertDeletedResponse(CamelModel):
    message: str = 'Concert deleted'
    concert_id: int
    reservations_removed: int
