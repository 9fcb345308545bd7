from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import AuthenticationError
from src.service.hotel_booking.domain.enum.user_role import UserRole
from src.service.hotel_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.hotel_booking.driving_adapter.http_controller.auth.role_auth import _bearer_token


def _encode(payload: dict) -> str:
    return jwt.encode(payload, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


@pytest.mark.unit
class TestJwtAuth:
    def test_round_trip_identity(self) -> None:
        auth = JwtAuth()
        token = auth.create_jwt_token(user_id=2, role=UserRole.ADMIN)

        user = auth.get_current_user_info_from_jwt(token)

        assert user.id == 2
        assert user.is_admin

    def test_missing_token(self) -> None:
        with pytest.raises(AuthenticationError, match='Not authenticated'):
            JwtAuth().get_current_user_info_from_jwt(None)

    def test_tampered_token(self) -> None:
        header, _, signature = JwtAuth().create_jwt_token(user_id=2).split('.')
        other_payload = JwtAuth().create_jwt_token(user_id=1, role=UserRole.ADMIN).split('.')[1]

        with pytest.raises(AuthenticationError, match='Invalid token'):
            JwtAuth().get_current_user_info_from_jwt(f'{header}.{other_payload}.{signature}')

    def test_expired_token(self) -> None:
        token = _encode({'user_id': 2, 'exp': datetime.now(timezone.utc) - timedelta(minutes=1)})

        with pytest.raises(AuthenticationError, match='Invalid token'):
            JwtAuth().get_current_user_info_from_jwt(token)

    @pytest.mark.parametrize(
        'payload',
        [{'role': 'user'}, {'user_id': '2'}, {'user_id': 2, 'role': 'superuser'}],
    )
    def test_bad_claims(self, payload: dict) -> None:
        with pytest.raises(AuthenticationError, match='Invalid token'):
            JwtAuth().get_current_user_info_from_jwt(_encode(payload))

    def test_role_defaults_to_user(self) -> None:
        user = JwtAuth().get_current_user_info_from_jwt(_encode({'user_id': 3}))

        assert user.role == UserRole.USER
        assert not user.is_admin


@pytest.mark.unit
@pytest.mark.parametrize(
    'header, expected',
    [
        ('Bearer abc.def', 'abc.def'),
        ('bearer abc.def', 'abc.def'),
        ('Basic abc', None),
        ('Bearer ', None),
        (None, None),
    ],
)
def test_bearer_token(header, expected) -> None:
    assert _bearer_token(header) == expected
