from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError, ForbiddenError
from src.service.ticketing.app.interface.i_user_profile_repo import IUserProfileRepo
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    user_profile_repo: IUserProfileRepo = Depends(Provide[Container.user_profile_repo]),
) -> Optional[UserProfile]:
    """Guests have no Authorization header; a present but invalid token is still rejected"""
    if credentials is None:
        return None

    user_id, email = jwt_auth.get_subject_from_jwt(credentials.credentials)
    profile = await user_profile_repo.get_by_id(user_id=user_id)
    if profile is None:
        # First request of a freshly registered identity-provider user
        profile = await user_profile_repo.create(profile=UserProfile(id=user_id, email=email))
    return profile


async def get_current_user(
    current_user: Optional[UserProfile] = Depends(get_optional_user),
) -> UserProfile:
    if current_user is None:
        raise AuthenticationError('Not authenticated')
    return current_user


async def require_admin(current_user: UserProfile = Depends(get_current_user)) -> UserProfile:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id,
            'user.role': current_user.role.value,
        },
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Admin access required')
        return current_user
