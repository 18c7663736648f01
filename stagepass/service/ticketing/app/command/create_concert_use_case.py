from datetime import datetime
from decimal import Decimal
from typing import Optional, Self

from fastapi import Depends

from stagepass.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from stagepass.platform.exception.exceptions import NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity


class CreateConcertUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create(
        self,
        *,
        identity: Identity,
        artist: str,
        venue_id: int,
        tour: str,
        starts_at: datetime,
        description: str,
        genre: str,
        ticket_type: str,
        price: Decimal,
        num_avail: int,
        rules: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> ConcertWithVenue:
        concert = ConcertEntity.create(
            artist=artist,
            venue_id=venue_id,
            tour=tour,
            starts_at=starts_at,
            description=description,
            genre=genre,
            organizer=identity,
            ticket_type=ticket_type,
            price=price,
            num_avail=num_avail,
            rules=rules,
            image_url=image_url,
        )

        async with self.uow:
            venue = await self.uow.venue_query_repo.get_by_id(venue_id=venue_id)
            if venue is None:
                raise NotFoundError('Venue not found')

            saved = await self.uow.concert_command_repo.create(concert=concert)
            await self.uow.commit()

        Logger.ticketing(concert_id=saved.id, user_id=identity.id).info(
            f'🎤 [CONCERT] "{saved.artist}" created by {identity.username} '
            f'with {saved.total_tickets} tickets'
        )
        return ConcertWithVenue(concert=saved, venue_name=venue.name, venue_address=venue.address)
