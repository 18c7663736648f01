import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from stagepass.platform.config.di import Container
from stagepass.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from stagepass.platform.exception.exceptions import (
    InsufficientInventoryError,
    InvalidRequestError,
    NotFoundError,
)
from stagepass.platform.logging.loguru_io import Logger
from stagepass.platform.metrics.reservation_metrics import ReservationMetrics
from stagepass.service.ticketing.domain.entity.reservation_entity import (
    ReservationEntity,
    validate_quantity,
)
from stagepass.service.ticketing.domain.value_object.identity import Identity


class ReserveTicketsUseCase:
    """
    Reserve tickets for a concert.

    Flow (one transaction):
    1. Conditionally decrement num_avail (only if enough tickets remain)
    2. No row updated -> tell "no such concert" (404) apart from "sold out" (409)
    3. Insert the reservation
    4. Commit

    Leaving the unit of work without commit rolls back, so a failed reserve
    changes neither inventory nor the reservation set.
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
    async def reserve(
        self, *, concert_id: int | None, quantity: int, identity: Identity
    ) -> ReservationEntity:
        start = time.perf_counter()
        if concert_id is None:
            self.metrics.record_reserve(result='invalid', duration=time.perf_counter() - start)
            raise InvalidRequestError('Concert id is required')
        try:
            validate_quantity(quantity)
        except InvalidRequestError:
            self.metrics.record_reserve(result='invalid', duration=time.perf_counter() - start)
            raise

        with self.tracer.start_as_current_span(
            'use_case.reserve_tickets',
            attributes={
                'concert.id': concert_id,
                'reservation.quantity': quantity,
                'user.id': identity.id,
            },
        ):
            async with self.uow:
                remaining = await self.uow.concert_command_repo.decrement_available(
                    concert_id=concert_id, quantity=quantity
                )
                if remaining is None:
                    concert = await self.uow.concert_query_repo.get_by_id(concert_id=concert_id)
                    duration = time.perf_counter() - start
                    if concert is None:
                        self.metrics.record_reserve(result='not_found', duration=duration)
                        raise NotFoundError('Concert not found')
                    self.metrics.record_reserve(result='insufficient', duration=duration)
                    Logger.ticketing(concert_id=concert_id, user_id=identity.id).info(
                        f'🚫 [RESERVE] requested={quantity} available={concert.tickets.num_avail}'
                    )
                    raise InsufficientInventoryError(concert_id=concert_id, requested=quantity)

                reservation = ReservationEntity.create(
                    user_id=identity.id, concert_id=concert_id, num_tickets=quantity
                )
                await self.uow.reservation_command_repo.create(reservation=reservation)
                await self.uow.commit()

            self.metrics.record_reserve(
                result='granted', duration=time.perf_counter() - start, tickets=quantity
            )
            Logger.ticketing(
                concert_id=concert_id, user_id=identity.id, reservation_id=reservation.id
            ).info(f'🎟️ [RESERVE] tickets={quantity} remaining={remaining}')
            return reservation
