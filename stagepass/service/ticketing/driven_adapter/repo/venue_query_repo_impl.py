from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_venue_query_repo import IVenueQueryRepo
from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity
from stagepass.service.ticketing.driven_adapter.model.venue_model import VenueModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import as_utc


class VenueQueryRepoImpl(IVenueQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(model: VenueModel) -> VenueEntity:
        return VenueEntity(
            id=model.id,
            name=model.name,
            address=model.address,
            created_at=as_utc(model.created_at),
        )

    @Logger.io
    async def get_by_id(self, *, venue_id: int) -> Optional[VenueEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(VenueModel).where(VenueModel.id == venue_id))
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    @Logger.io
    async def list_all(self) -> List[VenueEntity]:
        async with self._get_session() as session:
            result = await session.execute(select(VenueModel).order_by(VenueModel.name, VenueModel.id))
            return [self._to_entity(model) for model in result.scalars().all()]
