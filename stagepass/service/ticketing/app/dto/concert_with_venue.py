"""Concert read model joined with its venue."""

from typing import Optional

import attrs

from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity


@attrs.define(frozen=True)
class ConcertWithVenue:
    concert: ConcertEntity
    venue_name: Optional[str] = None
    venue_address: Optional[str] = None

    @property
    def venue_available(self) -> bool:
        return self.venue_name is not None
