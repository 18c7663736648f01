from abc import ABC, abstractmethod
from typing import List, Optional

from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity


class IConcertQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, concert_id: int) -> Optional[ConcertEntity]:
        pass

    @abstractmethod
    async def get_with_venue(self, *, concert_id: int) -> Optional[ConcertWithVenue]:
        pass

    @abstractmethod
    async def list_with_venue(
        self, *, genre: Optional[str] = None, venue_id: Optional[int] = None
    ) -> List[ConcertWithVenue]:
        pass

    @abstractmethod
    async def list_by_organizer(self, *, organizer: str) -> List[ConcertWithVenue]:
        pass

    @abstractmethod
    async def list_genres(self) -> List[str]:
        pass
