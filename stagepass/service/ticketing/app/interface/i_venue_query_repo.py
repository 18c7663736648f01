from abc import ABC, abstractmethod
from typing import List, Optional

from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity


class IVenueQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Optional[VenueEntity]:
        pass

    @abstractmethod
    async def list_all(self) -> List[VenueEntity]:
        pass
