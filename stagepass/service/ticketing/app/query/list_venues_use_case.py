from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from stagepass.platform.config.di import Container
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_venue_query_repo import IVenueQueryRepo
from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity


class ListVenuesUseCase:
    def __init__(self, *, venue_query_repo: IVenueQueryRepo) -> None:
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo)

    @Logger.io
    async def list_venues(self) -> List[VenueEntity]:
        return await self.venue_query_repo.list_all()
