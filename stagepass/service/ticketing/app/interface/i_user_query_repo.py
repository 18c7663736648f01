from abc import ABC, abstractmethod
from typing import Optional

from stagepass.service.ticketing.domain.entity.user_entity import UserEntity


class IUserQueryRepo(ABC):
    """User Query Repository - Handles read operations"""

    @abstractmethod
    async def get_by_email(self, *, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def exists_by_username_or_email(self, *, username: str, email: str) -> bool:
        pass
