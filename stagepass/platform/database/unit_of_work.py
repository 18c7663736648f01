"""
Unit of Work Pattern

- The UoW owns the request's session and its transaction
- Repositories obtained from the UoW share that session
- Leaving the `async with` block without `commit()` rolls everything back
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.database.orm_db_setting import get_async_session
from stagepass.platform.exception.exceptions import StorageError


if TYPE_CHECKING:
    from stagepass.service.ticketing.app.interface.i_concert_command_repo import (
        IConcertCommandRepo,
    )
    from stagepass.service.ticketing.app.interface.i_concert_query_repo import IConcertQueryRepo
    from stagepass.service.ticketing.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from stagepass.service.ticketing.app.interface.i_venue_query_repo import IVenueQueryRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            concert = await uow.concert_command_repo.decrement_available(...)
            await uow.reservation_command_repo.create(...)
            await uow.commit()
    """

    reservation_command_repo: IReservationCommandRepo
    concert_command_repo: IConcertCommandRepo
    concert_query_repo: IConcertQueryRepo
    venue_query_repo: IVenueQueryRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> AbstractUnitOfWork:
        from stagepass.service.ticketing.driven_adapter.repo.concert_command_repo_impl import (
            ConcertCommandRepoImpl,
        )
        from stagepass.service.ticketing.driven_adapter.repo.concert_query_repo_impl import (
            ConcertQueryRepoImpl,
        )
        from stagepass.service.ticketing.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from stagepass.service.ticketing.driven_adapter.repo.venue_query_repo_impl import (
            VenueQueryRepoImpl,
        )

        # Repositories share the unit of work's session
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)
        self.concert_command_repo = ConcertCommandRepoImpl(session=self.session)
        self.concert_query_repo = ConcertQueryRepoImpl(session_factory=None)
        self.concert_query_repo.session = self.session
        self.venue_query_repo = VenueQueryRepoImpl(session_factory=None)
        self.venue_query_repo.session = self.session

        return await super().__aenter__()

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError(f'Commit failed: {type(e).__name__}') from e

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """FastAPI dependency for Unit of Work"""
    return SqlAlchemyUnitOfWork(session)
