"""Reservation joined with snapshots of its concert and venue."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity


@attrs.define(frozen=True)
class ReservationDetail:
    """
    One row of a user's ticket list.

    The concert or venue may have been deleted since the reservation was made.
    The row is still returned with the snapshot fields left as None and the
    matching `*_available` flag false, so history is never silently hidden.
    """

    reservation: ReservationEntity
    artist: Optional[str] = None
    tour: Optional[str] = None
    starts_at: Optional[datetime] = None
    ticket_type: Optional[str] = None
    unit_price: Optional[Decimal] = None
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None
    concert_available: bool = False
    venue_available: bool = False

    @property
    def total_price(self) -> Optional[Decimal]:
        if self.unit_price is None:
            return None
        return self.unit_price * self.reservation.num_tickets
