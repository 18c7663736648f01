"""
User registration (Use Case Layer)
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from stagepass.platform.config.di import Container
from stagepass.platform.exception.exceptions import ConflictError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from stagepass.service.ticketing.app.interface.i_user_command_repo import IUserCommandRepo
from stagepass.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from stagepass.service.ticketing.domain.entity.user_entity import UserEntity


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    @Logger.io
    async def register(
        self, *, username: str, email: str, password: SecretStr, organizer: bool = False
    ) -> UserEntity:
        if await self.user_query_repo.exists_by_username_or_email(
            username=username, email=email
        ):
            raise ConflictError('User already exists.')

        user_entity = UserEntity.register(
            username=username,
            email=email,
            plain_password=password,
            organizer=organizer,
            password_hasher=self.password_hasher,
        )
        # The unique constraints still decide a concurrent registration race
        return await self.user_command_repo.create(user_entity=user_entity)
