from abc import ABC, abstractmethod

from stagepass.service.ticketing.domain.entity.user_entity import UserEntity


class IUserCommandRepo(ABC):
    """User Command Repository - Handles write operations"""

    @abstractmethod
    async def create(self, *, user_entity: UserEntity) -> UserEntity:
        """Persist a new user. Raises ConflictError when the username or email is taken."""
        pass
