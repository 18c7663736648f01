from abc import ABC, abstractmethod
from typing import List

from stagepass.service.ticketing.app.dto.reservation_detail import ReservationDetail


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def list_for_user(self, *, user_id: int) -> List[ReservationDetail]:
        """All reservations of the user, newest first, with concert/venue snapshots."""
        pass
