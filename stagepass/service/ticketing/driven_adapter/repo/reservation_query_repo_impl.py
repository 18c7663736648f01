from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.reservation_detail import ReservationDetail
from stagepass.service.ticketing.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.model.reservation_model import ReservationModel
from stagepass.service.ticketing.driven_adapter.model.venue_model import VenueModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import (
    as_utc,
    reservation_to_entity,
)


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_detail(
        reservation: ReservationModel,
        concert: Optional[ConcertModel],
        venue_name: Optional[str],
        venue_address: Optional[str],
    ) -> ReservationDetail:
        entity = reservation_to_entity(reservation)
        if concert is None:
            return ReservationDetail(reservation=entity)

        return ReservationDetail(
            reservation=entity,
            artist=concert.artist,
            tour=concert.tour,
            starts_at=as_utc(concert.starts_at),
            ticket_type=concert.ticket_type,
            unit_price=concert.price,
            venue_name=venue_name,
            venue_address=venue_address,
            concert_available=True,
            venue_available=venue_name is not None,
        )

    @Logger.io
    async def list_for_user(self, *, user_id: int) -> List[ReservationDetail]:
        # Outer joins: a deleted concert or venue must not hide the reservation
        stmt = (
            select(ReservationModel, ConcertModel, VenueModel.name, VenueModel.address)
            .outerjoin(ConcertModel, ReservationModel.concert_id == ConcertModel.id)
            .outerjoin(VenueModel, ConcertModel.venue_id == VenueModel.id)
            .where(ReservationModel.user_id == user_id)
            .order_by(ReservationModel.reserved_at.desc(), ReservationModel.id.desc())
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [self._to_detail(*row) for row in result.all()]
