from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from pydantic import SecretStr

from stagepass.platform.config.di import Container
from stagepass.platform.exception.exceptions import LoginError
from stagepass.platform.logging.loguru_io import Logger
from stagepass.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from stagepass.service.ticketing.app.interface.i_user_query_repo import IUserQueryRepo
from stagepass.service.ticketing.domain.entity.user_entity import UserEntity


class LoginUseCase:
    """Check credentials; token issuing stays with the HTTP auth adapter."""

    def __init__(
        self, *, user_query_repo: IUserQueryRepo, password_hasher: IPasswordHasher
    ) -> None:
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(user_query_repo=user_query_repo, password_hasher=password_hasher)

    @Logger.io
    async def authenticate(self, *, email: str, password: SecretStr) -> UserEntity:
        user_entity = UserEntity.validate_user_exists(
            await self.user_query_repo.get_by_email(email=email)
        )
        if not self.password_hasher.verify_password(
            plain_password=password, hashed_password=user_entity.hashed_password
        ):
            raise LoginError('LOGIN_BAD_CREDENTIALS')
        return user_entity
