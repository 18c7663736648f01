from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from stagepass.platform.config.di import Container
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.reservation_detail import ReservationDetail
from stagepass.service.ticketing.app.interface.i_reservation_query_repo import (
    IReservationQueryRepo,
)
from stagepass.service.ticketing.domain.value_object.identity import Identity


class ListUserReservationsUseCase:
    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_for_user(self, *, identity: Identity) -> List[ReservationDetail]:
        return await self.reservation_query_repo.list_for_user(user_id=identity.id)
