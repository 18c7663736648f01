from abc import ABC, abstractmethod
from typing import Any, Optional

from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity


class IConcertCommandRepo(ABC):
    """
    Concert writes. Every change to `num_avail` is one conditional statement,
    so concurrent callers never read-modify-write the counter in memory.
    """

    @abstractmethod
    async def create(self, *, concert: ConcertEntity) -> ConcertEntity:
        pass

    @abstractmethod
    async def decrement_available(self, *, concert_id: int, quantity: int) -> Optional[int]:
        """
        Take `quantity` tickets iff at least that many remain.

        Returns the remaining count, or None when the concert is missing or
        holds fewer than `quantity` tickets (nothing is changed in that case).
        """
        pass

    @abstractmethod
    async def increment_available(self, *, concert_id: int, quantity: int) -> bool:
        """Give back tickets. Returns False (and does nothing) if the concert is gone."""
        pass

    @abstractmethod
    async def update_details(self, *, concert_id: int, values: dict[str, Any]) -> None:
        """Update display fields and ticket type/price. Never touches inventory."""
        pass

    @abstractmethod
    async def update_allotment(self, *, concert_id: int, total_tickets: int) -> bool:
        """
        Resize the allotment, keeping reserved tickets reserved.

        Returns False when `total_tickets` is below the number already reserved.
        """
        pass

    @abstractmethod
    async def delete(self, *, concert_id: int) -> bool:
        pass
