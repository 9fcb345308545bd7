import attrs

from src.service.hotel_booking.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class AuthenticatedUser:
    """Verified identity attached to a request by the identity provider."""

    id: int
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

