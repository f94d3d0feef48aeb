"""
Bearer token verification

Tokens are issued by the external identity provider and signed with the shared
SECRET_KEY. Only `sub` (the user id) and `email` are read from them; the role
comes from the local user_profile row.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.audience = settings.JWT_AUDIENCE
        self.token_expire_hours = 1

    def create_jwt_token(self, *, user_id: str, email: str = '', **claims: Any) -> str:
        """Signs a token the same way the identity provider does (local dev and tests)"""
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            'sub': user_id,
            'email': email,
            'iat': now,
            'exp': now + timedelta(hours=self.token_expire_hours),
            **claims,
        }
        if self.audience:
            payload['aud'] = self.audience
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={'verify_aud': self.audience is not None},
            )
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token')

    def get_subject_from_jwt(self, token: Optional[str]) -> tuple[str, str]:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)
        user_id = payload.get('sub')
        if not user_id:
            raise AuthenticationError('Invalid token')

        return str(user_id), str(payload.get('email') or '')
