from datetime import datetime
from typing import Optional

from pydantic import StrictInt

from stagepass.platform.types.uuid7_utils_types import UtilsUUID7
from stagepass.service.ticketing.app.dto.reservation_detail import ReservationDetail
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
    Money,
    RecordId,
)


class ReserveTicketsRequest(CamelModel):
    # Both checked by the use case so a missing id and a bad quantity answer alike
    concert_id: Optional[RecordId] = None
    num_tickets: StrictInt

    model_config = CamelModel.model_config | {
        'json_schema_extra': {'example': {'concertId': 1, 'numTickets': 2}}
    }


class ReservationResponse(CamelModel):
    reservation_number: UtilsUUID7
    concert_id: int
    num_tickets: int
    status: str
    reserved_at: Optional[datetime]

    @classmethod
    def from_entity(cls, reservation: ReservationEntity) -> 'ReservationResponse':
        return cls(
            reservation_number=reservation.id,
            concert_id=reservation.concert_id,
            num_tickets=reservation.num_tickets,
            status=reservation.status.value,
            reserved_at=reservation.reserved_at,
        )


class ReservationDetailResponse(ReservationResponse):
    concert_available: bool
    venue_available: bool
    artist: Optional[str] = None
    tour: Optional[str] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    starts_at: Optional[datetime] = None
    date: Optional[str] = None
    time: Optional[str] = None
    ticket_type: Optional[str] = None
    unit_price: Optional[Money] = None
    total_price: Optional[Money] = None

    @classmethod
    def from_detail(cls, detail: ReservationDetail) -> 'ReservationDetailResponse':
        base = ReservationResponse.from_entity(detail.reservation)
        starts_at = detail.starts_at
        return cls(
            **base.model_dump(),
            concert_available=detail.concert_available,
            venue_available=detail.venue_available,
            artist=detail.artist,
            tour=detail.tour,
            venue_name=detail.venue_name,
            venue_address=detail.venue_address,
            starts_at=starts_at,
            date=starts_at.date().isoformat() if starts_at else None,
            time=starts_at.strftime('%H:%M') if starts_at else None,
            ticket_type=detail.ticket_type,
            unit_price=detail.unit_price,
            total_price=detail.total_price,
        )


class CancelReservationResponse(CamelModel):
    message: str = 'Reservation cancelled'
    reservation_number: UtilsUUID7
    tickets_released: int
