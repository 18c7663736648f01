from typing import Any, Optional, Self

from fastapi import Depends

from stagepass.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from stagepass.platform.exception.exceptions import InvalidRequestError, NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.dto.concert_with_venue import ConcertWithVenue
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.domain.value_object.identity import Identity
from stagepass.service.ticketing.domain.value_object.ticket_class import TicketClass


class UpdateConcertUseCase:
    """
    Edit a concert owned by the caller.

    Inventory is never written directly: changing the allotment goes through
    one conditional UPDATE that keeps every reserved ticket reserved and
    refuses a total below the reserved count.
    """

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def update(
        self,
        *,
        concert_id: int,
        identity: Identity,
        values: dict[str, Any],
        total_tickets: Optional[int] = None,
    ) -> ConcertWithVenue:
        async with self.uow:
            concert = await self.uow.concert_query_repo.get_by_id(concert_id=concert_id)
            if concert is None:
                raise NotFoundError('Concert not found')
            concert.ensure_owned_by(identity)
            values = ConcertEntity.clean_updates(values)

            if 'price' in values:
                # Reuse the ticket class rules (non-negative price)
                TicketClass(
                    type=values.get('ticket_type', concert.tickets.type),
                    price=values['price'],
                    num_avail=concert.tickets.num_avail,
                )

            if values.get('venue_id') is not None:
                venue = await self.uow.venue_query_repo.get_by_id(venue_id=values['venue_id'])
                if venue is None:
                    raise NotFoundError('Venue not found')

            await self.uow.concert_command_repo.update_details(
                concert_id=concert_id, values=values
            )

            if total_tickets is not None:
                concert.validate_allotment(total_tickets)
                # The reserved count may have grown since the read above;
                # the conditional update is the authority
                if not await self.uow.concert_command_repo.update_allotment(
                    concert_id=concert_id, total_tickets=total_tickets
                ):
                    raise InvalidRequestError(
                        f'Total tickets ({total_tickets}) cannot be lower than the number '
                        'of tickets already reserved'
                    )

            updated = await self.uow.concert_query_repo.get_with_venue(concert_id=concert_id)
            if updated is None:
                # Deleted concurrently: leaving without commit discards the edit
                raise NotFoundError('Concert not found')
            await self.uow.commit()

        Logger.ticketing(concert_id=concert_id, user_id=identity.id).info(
            f'✏️ [CONCERT] updated by {identity.username}'
        )
        return updated
