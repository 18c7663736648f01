from typing import Self

from fastapi import Depends

from stagepass.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from stagepass.platform.exception.exceptions import NotFoundError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.domain.value_object.identity import Identity


class DeleteConcertUseCase:
    """Delete a concert together with every reservation held against it."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete(self, *, concert_id: int, identity: Identity) -> int:
        async with self.uow:
            concert = await self.uow.concert_query_repo.get_by_id(concert_id=concert_id)
            if concert is None:
                raise NotFoundError('Concert not found')
            concert.ensure_owned_by(identity)

            removed = await self.uow.reservation_command_repo.delete_by_concert(
                concert_id=concert_id
            )
            if not await self.uow.concert_command_repo.delete(concert_id=concert_id):
                raise NotFoundError('Concert not found')
            await self.uow.commit()

        Logger.ticketing(concert_id=concert_id, user_id=identity.id).info(
            f'🗑️ [CONCERT] deleted by {identity.username}, {removed} reservation(s) removed'
        )
        return removed
