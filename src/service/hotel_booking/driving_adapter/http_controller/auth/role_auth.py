from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends, Header
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.hotel_booking.domain.entity.user_entity import AuthenticatedUser
from src.service.hotel_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


BEARER_PREFIX = 'bearer '


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
    authorization: Optional[str] = Header(None),
) -> AuthenticatedUser:
    """Identity from the session cookie, falling back to an Authorization: Bearer header"""
    return jwt_auth.get_current_user_info_from_jwt(token or _bearer_token(authorization))


async def require_admin(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={'user.id': current_user.id, 'user.role': current_user.role.value},
    ):
        if not current_user.is_admin:
            raise ForbiddenError('Access denied. Admin only.')
        return current_user
