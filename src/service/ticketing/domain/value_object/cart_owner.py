from typing import Optional

import attrs

from src.platform.exception.exceptions import AuthenticationError


@attrs.define(frozen=True)
class CartOwner:
    """Either a signed-in visitor (user_id) or a guest cart id"""

    user_id: Optional[str] = None
    guest_cart_id: Optional[str] = None

    @classmethod
    def resolve(cls, *, user_id: Optional[str], guest_cart_id: Optional[str]) -> 'CartOwner':
        if user_id:
            return cls(user_id=user_id)
        if guest_cart_id:
            return cls(guest_cart_id=guest_cart_id)
        raise AuthenticationError('Sign in or provide a cart id')

    @property
    def label(self) -> str:
        return f'user:{self.user_id}' if self.user_id else f'guest:{self.guest_cart_id}'
