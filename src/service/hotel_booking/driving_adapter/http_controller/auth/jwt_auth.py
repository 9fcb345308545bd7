"""
JWT session verification

Tokens are issued elsewhere; this service only verifies them and reads
the user_id / role claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.hotel_booking.domain.entity.user_entity import AuthenticatedUser
from src.service.hotel_booking.domain.enum.user_role import UserRole


class JwtAuth:
    def __init__(self) -> None:
        self.secret = settings.SECRET_KEY.get_secret_value()
        self.algorithm = settings.ALGORITHM
        self.token_expire_days = 7

    def create_jwt_token(self, *, user_id: int, role: UserRole = UserRole.USER) -> str:
        """Mint a session token (seed script and tests)"""
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'exp': now + timedelta(days=self.token_expire_days),
            'iat': now,
            'user_id': user_id,
            'role': role.value,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode_jwt_token(self, token: str) -> Dict:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthenticationError('Invalid token') from None

    def get_current_user_info_from_jwt(self, token: Optional[str]) -> AuthenticatedUser:
        if not token:
            raise AuthenticationError('Not authenticated')

        payload = self.decode_jwt_token(token)

        user_id = payload.get('user_id')
        role = payload.get('role', UserRole.USER.value)
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthenticationError('Invalid token')
        try:
            user_role = UserRole(role)
        except ValueError:
            raise AuthenticationError('Invalid token') from None

        return AuthenticatedUser(id=user_id, role=user_role)
