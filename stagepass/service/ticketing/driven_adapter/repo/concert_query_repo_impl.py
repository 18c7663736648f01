from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.app.interface.i_concert_query_repo import IConcertQueryRepo
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.model.venue_model import VenueModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import concert_to_entity


class ConcertQueryRepoImpl(IConcertQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        If a session is injected (from UoW), use it directly.
        Otherwise open one from session_factory.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _with_venue() -> Select:
        # populate_existing: rows updated in this session with synchronize_session=False
        # must not be served stale from the identity map
        return (
            select(ConcertModel, VenueModel.name, VenueModel.address)
            .outerjoin(VenueModel, ConcertModel.venue_id == VenueModel.id)
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _to_read_model(row) -> ConcertWithVenue:
        concert_model, venue_name, venue_address = row
        return ConcertWithVenue(
            concert=concert_to_entity(concert_model),
            venue_name=venue_name,
            venue_address=venue_address,
        )

    @Logger.io
    async def get_by_id(self, *, concert_id: int) -> Optional[ConcertEntity]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ConcertModel)
                .where(ConcertModel.id == concert_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return concert_to_entity(model) if model else None

    @Logger.io
    async def get_with_venue(self, *, concert_id: int) -> Optional[ConcertWithVenue]:
        async with self._get_session() as session:
            result = await session.execute(
                self._with_venue().where(ConcertModel.id == concert_id)
            )
            row = result.first()
            return self._to_read_model(row) if row else None

    @Logger.io
    async def list_with_venue(
        self, *, genre: Optional[str] = None, venue_id: Optional[int] = None
    ) -> List[ConcertWithVenue]:
        stmt = self._with_venue()
        if genre:
            stmt = stmt.where(ConcertModel.genre == genre)
        if venue_id is not None:
            stmt = stmt.where(ConcertModel.venue_id == venue_id)
        stmt = stmt.order_by(ConcertModel.starts_at, ConcertModel.id)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [self._to_read_model(row) for row in result.all()]

    @Logger.io
    async def list_by_organizer(self, *, organizer: str) -> List[ConcertWithVenue]:
        stmt = (
            self._with_venue()
            .where(ConcertModel.organizer == organizer)
            .order_by(ConcertModel.starts_at, ConcertModel.id)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [self._to_read_model(row) for row in result.all()]

    @Logger.io
    async def list_genres(self) -> List[str]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ConcertModel.genre).distinct().order_by(ConcertModel.genre)
            )
            return list(result.scalars().all())
