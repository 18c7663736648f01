from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from stagepass.platform.config.di import Container
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_venue_command_repo import IVenueCommandRepo
from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity


class CreateVenueUseCase:
    def __init__(self, *, venue_command_repo: IVenueCommandRepo) -> None:
        self.venue_command_repo = venue_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_command_repo: IVenueCommandRepo = Depends(Provide[Container.venue_command_repo]),
    ) -> Self:
        return cls(venue_command_repo=venue_command_repo)

    @Logger.io
    async def create(self, *, name: str, address: str) -> VenueEntity:
        return await self.venue_command_repo.create(venue=VenueEntity(name=name, address=address))
