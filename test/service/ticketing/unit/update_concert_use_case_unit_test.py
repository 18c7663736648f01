"""
Unit tests for UpdateConcertUseCase

Test Focus:
1. Only the owning organizer may edit
2. The allotment can shrink down to, but never below, the reserved count
3. Field edits never touch num_avail directly
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from stagepass.platform.exception.exceptions import (
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
)
from stagepass.service.ticketing.app.command.update_concert_use_case import UpdateConcertUseCase
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.domain.value_object.ticket_class import TicketClass


@pytest.mark.unit
class TestUpdateConcert:
    @pytest.fixture
    def owner(self) -> Identity:
        return Identity(id=1, username='organizer', organizer=True)

    @pytest.fixture
    def concert(self) -> ConcertEntity:
        # 10 tickets allotted, 4 reserved
        return ConcertEntity(
            id=5,
            artist='Artist',
            venue_id=1,
            tour='Tour',
            starts_at=datetime(2026, 11, 20, 20, 0, tzinfo=timezone.utc),
            description='desc',
            genre='Jazz',
            organizer='organizer',
            tickets=TicketClass(type='GA', price=Decimal('50'), num_avail=6),
            total_tickets=10,
        )

    @pytest.fixture
    def uow(self, concert: ConcertEntity) -> AsyncMock:
        uow = AsyncMock()
        uow.concert_query_repo.get_by_id = AsyncMock(return_value=concert)
        uow.concert_query_repo.get_with_venue = AsyncMock(
            return_value=ConcertWithVenue(
                concert=concert, venue_name='Blue Note', venue_address='NYC'
            )
        )
        uow.concert_command_repo.update_allotment = AsyncMock(return_value=True)
        return uow

    @pytest.mark.asyncio
    async def test_update_fields(self, uow: AsyncMock, owner: Identity) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        result = await use_case.update(concert_id=5, identity=owner, values={'tour': 'New Tour'})

        assert result.venue_name == 'Blue Note'
        uow.concert_command_repo.update_details.assert_awaited_once_with(
            concert_id=5, values={'tour': 'New Tour'}
        )
        uow.concert_command_repo.update_allotment.assert_not_awaited()
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shrink_allotment_to_reserved_count(
        self, uow: AsyncMock, owner: Identity
    ) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        await use_case.update(concert_id=5, identity=owner, values={}, total_tickets=4)

        uow.concert_command_repo.update_allotment.assert_awaited_once_with(
            concert_id=5, total_tickets=4
        )
        uow.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_allotment_below_reserved_is_rejected(
        self, uow: AsyncMock, owner: Identity
    ) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(InvalidRequestError):
            await use_case.update(concert_id=5, identity=owner, values={}, total_tickets=3)

        uow.concert_command_repo.update_allotment.assert_not_awaited()
        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_allotment_lost_race_is_rejected(self, uow: AsyncMock, owner: Identity) -> None:
        # Reservations arrived after the read: the conditional update refuses
        uow.concert_command_repo.update_allotment = AsyncMock(return_value=False)
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(InvalidRequestError):
            await use_case.update(concert_id=5, identity=owner, values={}, total_tickets=5)

        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_organizer_is_forbidden(self, uow: AsyncMock) -> None:
        use_case = UpdateConcertUseCase(uow=uow)
        intruder = Identity(id=2, username='someone_else', organizer=True)

        with pytest.raises(ForbiddenError):
            await use_case.update(concert_id=5, identity=intruder, values={'tour': 'x'})

        uow.concert_command_repo.update_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_negative_price_is_rejected(self, uow: AsyncMock, owner: Identity) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(InvalidRequestError):
            await use_case.update(concert_id=5, identity=owner, values={'price': Decimal('-1')})

    @pytest.mark.asyncio
    async def test_unknown_venue_is_not_found(self, uow: AsyncMock, owner: Identity) -> None:
        uow.venue_query_repo.get_by_id = AsyncMock(return_value=None)
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(NotFoundError, match='Venue not found'):
            await use_case.update(concert_id=5, identity=owner, values={'venue_id': 42})

    @pytest.mark.asyncio
    async def test_unknown_concert_is_not_found(self, uow: AsyncMock, owner: Identity) -> None:
        uow.concert_query_repo.get_by_id = AsyncMock(return_value=None)
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(NotFoundError, match='Concert not found'):
            await use_case.update(concert_id=99, identity=owner, values={'tour': 'x'})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'values',
        [{'artist': '   '}, {'genre': ''}, {'description': ' \n '}, {'ticket_type': ' '}],
    )
    async def test_blank_text_is_rejected(
        self, uow: AsyncMock, owner: Identity, values: dict
    ) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(InvalidRequestError, match='cannot be blank'):
            await use_case.update(concert_id=5, identity=owner, values=values)

        uow.concert_command_repo.update_details.assert_not_awaited()
        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_text_is_stripped(self, uow: AsyncMock, owner: Identity) -> None:
        use_case = UpdateConcertUseCase(uow=uow)

        await use_case.update(
            concert_id=5, identity=owner, values={'artist': '  Artist  ', 'genre': ' Soul '}
        )

        uow.concert_command_repo.update_details.assert_awaited_once_with(
            concert_id=5, values={'artist': 'Artist', 'genre': 'Soul'}
        )

    @pytest.mark.asyncio
    async def test_concert_deleted_mid_update_is_not_found(
        self, uow: AsyncMock, owner: Identity
    ) -> None:
        uow.concert_query_repo.get_with_venue = AsyncMock(return_value=None)
        use_case = UpdateConcertUseCase(uow=uow)

        with pytest.raises(NotFoundError, match='Concert not found'):
            await use_case.update(concert_id=5, identity=owner, values={'tour': 'x'})

        uow.commit.assert_not_awaited()
