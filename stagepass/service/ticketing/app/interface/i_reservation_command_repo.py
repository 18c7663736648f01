from abc import ABC, abstractmethod
from typing import Optional

from uuid_utils import UUID

from stagepass.service.ticketing.domain.entity.reservation_entity import ReservationEntity


class IReservationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, reservation: ReservationEntity) -> ReservationEntity:
        pass

    @abstractmethod
    async def delete_owned(
        self, *, reservation_id: UUID, user_id: int
    ) -> Optional[ReservationEntity]:
        """
        Delete the reservation only if `user_id` owns it.

        Returns the deleted reservation, or None when it does not exist or
        belongs to someone else.
        """
        pass

    @abstractmethod
    async def delete_by_concert(self, *, concert_id: int) -> int:
        """Delete every reservation of a concert; returns how many were removed."""
        pass
