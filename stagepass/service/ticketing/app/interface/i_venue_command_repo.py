from abc import ABC, abstractmethod

from stagepass.service.ticketing.domain.entity.venue_entity import VenueEntity


class IVenueCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, venue: VenueEntity) -> VenueEntity:
        pass
