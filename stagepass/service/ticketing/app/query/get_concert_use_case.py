from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from stagepass.platform.config.di import Container
from stagepass.platform.exception.exceptions import NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.app.interface.i_concert_query_repo import IConcertQueryRepo


class GetConcertUseCase:
    def __init__(self, *, concert_query_repo: IConcertQueryRepo) -> None:
        self.concert_query_repo = concert_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        concert_query_repo: IConcertQueryRepo = Depends(Provide[Container.concert_query_repo]),
    ) -> Self:
        return cls(concert_query_repo=concert_query_repo)

    @Logger.io
    async def get(self, *, concert_id: int) -> ConcertWithVenue:
        concert = await self.concert_query_repo.get_with_venue(concert_id=concert_id)
        if concert is None:
            raise NotFoundError('Concert not found')
        return concert
