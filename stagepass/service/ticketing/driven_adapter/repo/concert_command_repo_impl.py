from typing import Any, Optional

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_concert_command_repo import IConcertCommandRepo
from stagepass.service.ticketing.domain.entity.concert_entity import ConcertEntity
from stagepass.service.ticketing.driven_adapter.model.concert_model import ConcertModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import concert_to_entity


class ConcertCommandRepoImpl(IConcertCommandRepo):
    """Runs inside a unit of work: never commits, the caller does."""

    UPDATABLE_FIELDS = frozenset(
        {
            'artist',
            'venue_id',
            'tour',
            'starts_at',
            'description',
            'genre',
            'rules',
            'image_url',
            'ticket_type',
            'price',
        }
    )

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, concert: ConcertEntity) -> ConcertEntity:
        model = ConcertModel(
            artist=concert.artist,
            venue_id=concert.venue_id,
            tour=concert.tour,
            starts_at=concert.starts_at,
            description=concert.description,
            genre=concert.genre,
            rules=concert.rules,
            organizer=concert.organizer,
            image_url=concert.image_url,
            ticket_type=concert.tickets.type,
            price=concert.tickets.price,
            num_avail=concert.tickets.num_avail,
            total_tickets=concert.total_tickets,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return concert_to_entity(model)

    @Logger.io
    async def decrement_available(self, *, concert_id: int, quantity: int) -> Optional[int]:
        # Compare-and-decrement in one statement: the row lock taken by the UPDATE
        # serializes concurrent reservations against the same concert
        result = await self.session.execute(
            update(ConcertModel)
            .where(ConcertModel.id == concert_id, ConcertModel.num_avail >= quantity)
            .values(num_avail=ConcertModel.num_avail - quantity)
            .returning(ConcertModel.num_avail)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    @Logger.io
    async def increment_available(self, *, concert_id: int, quantity: int) -> bool:
        result = await self.session.execute(
            update(ConcertModel)
            .where(ConcertModel.id == concert_id)
            .values(num_avail=ConcertModel.num_avail + quantity)
            .returning(ConcertModel.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def update_details(self, *, concert_id: int, values: dict[str, Any]) -> None:
        unknown = set(values) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f'Fields cannot be updated this way: {sorted(unknown)}')
        if not values:
            return
        await self.session.execute(
            update(ConcertModel)
            .where(ConcertModel.id == concert_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    @Logger.io
    async def update_allotment(self, *, concert_id: int, total_tickets: int) -> bool:
        # Both SET expressions read the pre-update row, so the reserved count is preserved
        reserved = ConcertModel.total_tickets - ConcertModel.num_avail
        result = await self.session.execute(
            update(ConcertModel)
            .where(ConcertModel.id == concert_id, reserved <= total_tickets)
            .values(num_avail=total_tickets - reserved, total_tickets=total_tickets)
            .returning(ConcertModel.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def delete(self, *, concert_id: int) -> bool:
        result = await self.session.execute(
            delete(ConcertModel)
            .where(ConcertModel.id == concert_id)
            .returning(ConcertModel.id)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none() is not None
