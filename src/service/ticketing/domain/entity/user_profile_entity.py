from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.enum.user_role import UserRole


@attrs.define
class UserProfile:
    """
    Local profile of an identity-provider user

    id is the token subject. Credentials live with the identity provider;
    only the role used for admin checks is kept here.
    """

    id: str
    email: str = ''
    full_name: str = ''
    phone: Optional[str] = None
    role: UserRole = UserRole.VISITOR
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)
