from datetime import datetime
from typing import Optional

import attrs
from pydantic import SecretStr

from stagepass.platform.exception.exceptions import InvalidRequestError, LoginError
from stagepass.service.ticketing.app.interface.i_password_hasher import IPasswordHasher
from stagepass.service.ticketing.domain.value_object.identity import Identity


@attrs.define
class UserEntity:
    username: str = ''
    email: str = ''
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    id: Optional[int] = None
    organizer: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def register(
        cls,
        *,
        username: str,
        email: str,
        plain_password: SecretStr,
        organizer: bool,
        password_hasher: IPasswordHasher,
    ) -> 'UserEntity':
        if not username.strip() or not email.strip():
            raise InvalidRequestError('All fields are required.')
        return cls(
            username=username.strip(),
            email=email.strip().lower(),
            hashed_password=password_hasher.hash_password(plain_password=plain_password),
            organizer=organizer,
        )

    @staticmethod
    def validate_user_exists(user_entity: Optional['UserEntity']) -> 'UserEntity':
        if not user_entity:
            raise LoginError('LOGIN_BAD_CREDENTIALS')
        return user_entity

    def to_identity(self) -> Identity:
        if self.id is None:
            raise InvalidRequestError('User has not been persisted')
        return Identity(id=self.id, username=self.username, organizer=self.organizer)
