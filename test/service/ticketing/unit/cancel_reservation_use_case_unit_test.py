"""
Unit tests for CancelReservationUseCase

Test Focus:
1. Tickets go back to the concert the reservation was held against
2. Someone else's (or a missing) reservation is a 404
3. A deleted concert makes the give-back a no-op, the cancel still succeeds
"""

from unittest.mock import AsyncMock, Mock

import pytest
import uuid_utils

from stagepass.platform.exception.exceptions import NotFoundError
from stagepass.service.ticketing.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity


@pytest.mark.unit
class TestCancelReservation:
    @pytest.fixture
    def fan(self) -> Identity:
        return Identity(id=7, username='fan')

    @pytest.fixture
    def reservation(self) -> ReservationEntity:
        return ReservationEntity.create(user_id=7, concert_id=3, num_tickets=4)

    @pytest.fixture
    def uow(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def metrics(self) -> Mock:
        return Mock()

    @pytest.mark.asyncio
    async def test_cancel_restores_inventory(
        self, uow: AsyncMock, metrics: Mock, fan: Identity, reservation: ReservationEntity
    ) -> None:
        uow.reservation_command_repo.delete_owned = AsyncMock(return_value=reservation)
        uow.concert_command_repo.increment_available = AsyncMock(return_value=True)
        use_case = CancelReservationUseCase(uow=uow, metrics=metrics)

        result = await use_case.cancel(reservation_id=reservation.id, identity=fan)

        assert result is reservation
        uow.reservation_command_repo.delete_owned.assert_awaited_once_with(
            reservation_id=reservation.id, user_id=7
        )
        uow.concert_command_repo.increment_available.assert_awaited_once_with(
            concert_id=3, quantity=4
        )
        uow.commit.assert_awaited_once()
        metrics.record_release.assert_called_once_with(tickets=4)

    @pytest.mark.asyncio
    async def test_not_owned_or_missing_is_not_found(
        self, uow: AsyncMock, metrics: Mock, fan: Identity
    ) -> None:
        uow.reservation_command_repo.delete_owned = AsyncMock(return_value=None)
        use_case = CancelReservationUseCase(uow=uow, metrics=metrics)

        with pytest.raises(NotFoundError, match='Reservation not found'):
            await use_case.cancel(reservation_id=uuid_utils.uuid7(), identity=fan)

        uow.concert_command_repo.increment_available.assert_not_awaited()
        uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concert_gone_still_cancels(
        self, uow: AsyncMock, metrics: Mock, fan: Identity, reservation: ReservationEntity
    ) -> None:
        uow.reservation_command_repo.delete_owned = AsyncMock(return_value=reservation)
        uow.concert_command_repo.increment_available = AsyncMock(return_value=False)
        use_case = CancelReservationUseCase(uow=uow, metrics=metrics)

        result = await use_case.cancel(reservation_id=reservation.id, identity=fan)

        assert result.num_tickets == 4
        uow.commit.assert_awaited_once()
        metrics.record_release.assert_not_called()
