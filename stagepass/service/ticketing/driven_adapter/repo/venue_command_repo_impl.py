from typing import AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_venue_command_repo import IVenueCommandRepo
from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity
from stagepass.service.ticketing.driven_adapter.model.venue_model import VenueModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import as_utc


class VenueCommandRepoImpl(IVenueCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, venue: VenueEntity) -> VenueEntity:
        async with self.session_factory() as session:
            model = VenueModel(name=venue.name.strip(), address=venue.address.strip())
            session.add(model)
            await session.commit()
            await session.refresh(model)

            return VenueEntity(
                id=model.id,
                name=model.name,
                address=model.address,
                created_at=as_utc(model.created_at),
            )
