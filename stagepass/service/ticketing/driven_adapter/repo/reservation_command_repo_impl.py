from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.domain.enum.reservation_status import ReservationStatus
from stagepass.service.ticketing.driven_adapter.model.reservation_model import ReservationModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import as_utc, to_std_uuid


class ReservationCommandRepoImpl(IReservationCommandRepo):
    """Runs inside a unit of work: never commits, the caller does."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, reservation: ReservationEntity) -> ReservationEntity:
        self.session.add(
            ReservationModel(
                id=to_std_uuid(reservation.id),
                user_id=reservation.user_id,
                concert_id=reservation.concert_id,
                num_tickets=reservation.num_tickets,
                status=reservation.status.value,
                reserved_at=reservation.reserved_at,
            )
        )
        await self.session.flush()
        return reservation

    @Logger.io
    async def delete_owned(
        self, *, reservation_id: UUID, user_id: int
    ) -> Optional[ReservationEntity]:
        # Ownership is part of the WHERE clause, so "not yours" and "missing" look the same
        result = await self.session.execute(
            delete(ReservationModel)
            .where(
                ReservationModel.id == to_std_uuid(reservation_id),
                ReservationModel.user_id == user_id,
            )
            .returning(
                ReservationModel.concert_id,
                ReservationModel.num_tickets,
                ReservationModel.status,
                ReservationModel.reserved_at,
            )
            .execution_options(synchronize_session=False)
        )
        row = result.first()
        if row is None:
            return None
        return ReservationEntity(
            id=reservation_id,
            user_id=user_id,
            concert_id=row.concert_id,
            num_tickets=row.num_tickets,
            status=ReservationStatus(row.status),
            reserved_at=as_utc(row.reserved_at),
        )

    @Logger.io
    async def delete_by_concert(self, *, concert_id: int) -> int:
        result = await self.session.execute(
            delete(ReservationModel)
            .where(ReservationModel.concert_id == concert_id)
            .returning(ReservationModel.id)
            .execution_options(synchronize_session=False)
        )
        return len(result.all())
