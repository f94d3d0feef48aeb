from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.user_profile_entity import UserProfile


class IUserProfileRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: str) -> Optional[UserProfile]:
        pass

    @abstractmethod
    async def create(self, *, profile: UserProfile) -> UserProfile:
        pass
