from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stagepass.platform.exception.exceptions import ConflictError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from stagepass.service.ticketing.domain.entity.user_entity import UserEntity
from stagepass.service.ticketing.driven_adapter.model.user_model import UserModel
from stagepass.service.ticketing.driven_adapter.repo.row_mapper import as_utc


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                username=user_entity.username,
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                organizer=user_entity.organizer,
            )

            session.add(user_model)
            try:
                await session.commit()
            except IntegrityError as e:
                # Unique username/email lost a race with a concurrent registration
                await session.rollback()
                raise ConflictError('User already exists.') from e
            await session.refresh(user_model)

            return UserEntity(
                id=user_model.id,
                username=user_model.username,
                email=user_model.email,
                organizer=user_model.organizer,
                created_at=as_utc(user_model.created_at),
            )
