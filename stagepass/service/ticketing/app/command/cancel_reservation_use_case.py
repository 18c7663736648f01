from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from stagepass.platform.config.di import Container
from stagepass.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from stagepass.platform.exception.exceptions import NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.platform.metrics.reservation_metrics import ReservationMetrics
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity


class CancelReservationUseCase:
    """
    Cancel a reservation and give its tickets back.

    The delete is scoped to the caller's own reservations, so cancelling
    someone else's reservation answers 404 exactly like a missing one. If the
    concert was deleted in the meantime the give-back is a no-op.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, metrics: ReservationMetrics) -> None:
        self.uow = uow
        self.metrics = metrics
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        metrics: ReservationMetrics = Depends(Provide[Container.reservation_metrics]),
    ) -> Self:
        return cls(uow=uow, metrics=metrics)

    @Logger.io
    async def cancel(self, *, reservation_id: UUID, identity: Identity) -> ReservationEntity:
        with self.tracer.start_as_current_span(
            'use_case.cancel_reservation',
            attributes={'reservation.id': str(reservation_id), 'user.id': identity.id},
        ):
            async with self.uow:
                reservation = await self.uow.reservation_command_repo.delete_owned(
                    reservation_id=reservation_id, user_id=identity.id
                )
                if reservation is None:
                    raise NotFoundError('Reservation not found')

                restored = await self.uow.concert_command_repo.increment_available(
                    concert_id=reservation.concert_id, quantity=reservation.num_tickets
                )
                await self.uow.commit()

            if restored:
                self.metrics.record_release(tickets=reservation.num_tickets)
            Logger.ticketing(
                concert_id=reservation.concert_id,
                user_id=identity.id,
                reservation_id=reservation_id,
            ).info(f'↩️ [CANCEL] tickets={reservation.num_tickets} restored={restored}')
            return reservation
