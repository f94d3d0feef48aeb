from typing import Optional

from sqlalchemy.exc import IntegrityError

from src.platform.database.session_repo import SessionFactory
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import as_utc
from src.service.ticketing.app.interface.i_user_profile_repo import IUserProfileRepo
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.driven_adapter.model.user_profile_model import UserProfileModel


class UserProfileRepoImpl(IUserProfileRepo):
    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, user_id: str) -> Optional[UserProfile]:
        async with self.session_factory() as session:
            model = await session.get(UserProfileModel, user_id)
            return self._model_to_entity(model) if model else None

    @Logger.io
    async def create(self, *, profile: UserProfile) -> UserProfile:
        async with self.session_factory() as session:
            model = UserProfileModel(
                id=profile.id,
                email=profile.email,
                full_name=profile.full_name,
                phone=profile.phone,
                role=profile.role.value,
            )
            session.add(model)
            try:
                await session.commit()
            except IntegrityError:
                # Concurrent first request of the same user created it already
                await session.rollback()
                existing = await session.get(UserProfileModel, profile.id)
                assert existing is not None
                return self._model_to_entity(existing)
            await session.refresh(model)
            return self._model_to_entity(model)

    @staticmethod
    def _model_to_entity(model: UserProfileModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            phone=model.phone,
            role=UserRole(model.role),
            created_at=as_utc(model.created_at),
        )
