from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from stagepass.platform.config.di import Container
from stagepass.platform.exception.exceptions import ForbiddenError, NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.app.interface.i_concert_query_repo import IConcertQueryRepo
from stagepass.service.ticketing.app.interface.i_venue_query_repo import IVenueQueryRepo
from stagepass.service.ticketing.domain.value_object.identity import Identity


class ListConcertsUseCase:
    """Catalog browsing: everything here is read-only."""

    def __init__(
        self, *, concert_query_repo: IConcertQueryRepo, venue_query_repo: IVenueQueryRepo
    ) -> None:
        self.concert_query_repo = concert_query_repo
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        concert_query_repo: IConcertQueryRepo = Depends(Provide[Container.concert_query_repo]),
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(concert_query_repo=concert_query_repo, venue_query_repo=venue_query_repo)

    @Logger.io
    async def list_concerts(
        self, *, genre: Optional[str] = None, venue_id: Optional[int] = None
    ) -> List[ConcertWithVenue]:
        return await self.concert_query_repo.list_with_venue(genre=genre, venue_id=venue_id)

    @Logger.io
    async def list_by_venue(self, *, venue_id: int) -> List[ConcertWithVenue]:
        if await self.venue_query_repo.get_by_id(venue_id=venue_id) is None:
            raise NotFoundError('Venue not found')
        return await self.concert_query_repo.list_with_venue(venue_id=venue_id)

    @Logger.io
    async def list_for_organizer(self, *, identity: Identity) -> List[ConcertWithVenue]:
        if not identity.organizer:
            raise ForbiddenError('Only organizers can list their concerts')
        return await self.concert_query_repo.list_by_organizer(organizer=identity.username)

    @Logger.io
    async def list_genres(self) -> List[str]:
        return await self.concert_query_repo.list_genres()
