"""ORM row -> domain entity conversions shared by the SQLAlchemy repositories."""

from datetime import datetime, timezone
from typing import Optional
import uuid

from uuid_utils import UUID

from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.domain.enum.reservation_status import ReservationStatus
from stagepass.service.ticketing.domain.value_object.ticket_class import TicketClass
from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.model.reservation_model import ReservationModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def to_std_uuid(value: UUID | uuid.UUID | str) -> uuid.UUID:
    """uuid_utils.UUID -> stdlib uuid.UUID, which is what the Uuid column type binds."""
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def concert_to_entity(model: ConcertModel) -> ConcertEntity:
    return ConcertEntity(
        id=model.id,
        artist=model.artist,
        venue_id=model.venue_id,
        tour=model.tour,
        starts_at=as_utc(model.starts_at),  # type: ignore[arg-type]
        description=model.description,
        genre=model.genre,
        rules=model.rules,
        organizer=model.organizer,
        image_url=model.image_url,
        tickets=TicketClass(type=model.ticket_type, price=model.price, num_avail=model.num_avail),
        total_tickets=model.total_tickets,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def reservation_to_entity(model: ReservationModel) -> ReservationEntity:
    return ReservationEntity(
        id=UUID(str(model.id)),  # Convert stdlib uuid.UUID to uuid_utils.UUID
        user_id=model.user_id,
        concert_id=model.concert_id,
        num_tickets=model.num_tickets,
        status=ReservationStatus(model.status),
        reserved_at=as_utc(model.reserved_at),
    )
