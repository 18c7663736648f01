"""
Integration tests for the reservation engine under concurrency

Every reserve call runs in its own session and unit of work against the real
database, so the conditional decrement is the only thing serializing them.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import AsyncGenerator

import pytest
from sqlalchemy import func, select

from stagepass.platform.database.orm_db_setting import (
    Database,
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from stagepass.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from stagepass.platform.exception.exceptions import InsufficientInventoryError
from stagepass.platform.metrics.reservation_metrics import metrics
from stagepass.service.ticketing.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from stagepass.service.ticketing.app.command.reserve_tickets_use_case import (
    ReserveTicketsUseCase,
)
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.domain.entity.user_entity import UserEntity
from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.model.reservation_model import ReservationModel
from stagepass.service.ticketing.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.venue_command_repo_impl import (
    VenueCommandRepoImpl,
)


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    await create_db_and_tables()
    yield Database()
    await dispose_engine()


async def _create_user(database: Database, username: str, organizer: bool = False) -> Identity:
    user = await UserCommandRepoImpl(database.session).create(
        user_entity=UserEntity(
            username=username,
            email=f'{username}@t.com',
            hashed_password='not-used',
            organizer=organizer,
        )
    )
    return user.to_identity()


async def _create_concert(database: Database, organizer: Identity, num_avail: int) -> int:
    venue = await VenueCommandRepoImpl(database.session).create(
        venue=VenueEntity(name='Arena', address='1 Main St')
    )
    concert = ConcertEntity.create(
        artist='Artist',
        venue_id=venue.id,
        tour='Tour',
        starts_at=datetime(2026, 11, 20, 20, 0, tzinfo=timezone.utc),
        description='desc',
        genre='Rock',
        organizer=organizer,
        ticket_type='GA',
        price=Decimal('10'),
        num_avail=num_avail,
    )
    async with get_session_maker()() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            saved = await uow.concert_command_repo.create(concert=concert)
            await uow.commit()
    assert saved.id is not None
    return saved.id


async def _reserve(concert_id: int, quantity: int, identity: Identity) -> ReservationEntity:
    async with get_session_maker()() as session:
        use_case = ReserveTicketsUseCase(uow=SqlAlchemyUnitOfWork(session), metrics=metrics)
        return await use_case.reserve(concert_id=concert_id, quantity=quantity, identity=identity)


async def _inventory(concert_id: int) -> tuple[int, int]:
    """(num_avail, tickets held by live reservations)"""
    async with get_session_maker()() as session:
        num_avail = await session.scalar(
            select(ConcertModel.num_avail).where(ConcertModel.id == concert_id)
        )
        held = await session.scalar(
            select(func.coalesce(func.sum(ReservationModel.num_tickets), 0)).where(
                ReservationModel.concert_id == concert_id
            )
        )
    return num_avail, held


@pytest.mark.integration
class TestReservationConcurrency:
    @pytest.mark.asyncio
    async def test_two_callers_for_the_last_tickets(self, database: Database) -> None:
        organizer = await _create_user(database, 'organizer', organizer=True)
        fan_a = await _create_user(database, 'fan_a')
        fan_b = await _create_user(database, 'fan_b')
        concert_id = await _create_concert(database, organizer, num_avail=5)

        results = await asyncio.gather(
            _reserve(concert_id, 3, fan_a),
            _reserve(concert_id, 3, fan_b),
            return_exceptions=True,
        )

        granted = [r for r in results if isinstance(r, ReservationEntity)]
        refused = [r for r in results if isinstance(r, InsufficientInventoryError)]
        assert len(granted) == 1
        assert len(refused) == 1
        assert await _inventory(concert_id) == (2, 3)

    @pytest.mark.asyncio
    async def test_many_callers_never_oversell(self, database: Database) -> None:
        organizer = await _create_user(database, 'organizer', organizer=True)
        fans = [await _create_user(database, f'fan_{i}') for i in range(20)]
        concert_id = await _create_concert(database, organizer, num_avail=10)

        results = await asyncio.gather(
            *(_reserve(concert_id, 1, fan) for fan in fans), return_exceptions=True
        )

        granted = [r for r in results if isinstance(r, ReservationEntity)]
        refused = [r for r in results if isinstance(r, InsufficientInventoryError)]
        assert len(granted) == 10
        assert len(refused) == 10
        num_avail, held = await _inventory(concert_id)
        assert num_avail == 0
        assert held == 10

    @pytest.mark.asyncio
    async def test_conservation_across_reserve_and_cancel(self, database: Database) -> None:
        organizer = await _create_user(database, 'organizer', organizer=True)
        fans = [await _create_user(database, f'fan_{i}') for i in range(6)]
        concert_id = await _create_concert(database, organizer, num_avail=12)

        reservations = await asyncio.gather(*(_reserve(concert_id, 2, fan) for fan in fans))

        async def _cancel(reservation: ReservationEntity, identity: Identity) -> None:
            async with get_session_maker()() as session:
                use_case = CancelReservationUseCase(
                    uow=SqlAlchemyUnitOfWork(session), metrics=metrics
                )
                await use_case.cancel(reservation_id=reservation.id, identity=identity)

        await asyncio.gather(
            *(_cancel(reservation, fan) for reservation, fan in zip(reservations[:3], fans[:3]))
        )

        num_avail, held = await _inventory(concert_id)
        assert num_avail + held == 12
        assert held == 6
