from datetime import datetime
from typing import Any, Optional


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    kind: str = 'internal_error'

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def detail(self) -> dict[str, Any]:
        return {}


class ValidationError(CustomBaseError):
    kind = 'validation_error'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    kind = 'not_found'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class UnavailableError(CustomBaseError):
    kind = 'unavailable'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidRangeError(CustomBaseError):
    kind = 'invalid_range'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ConflictError(CustomBaseError):
    kind = 'conflict'

    def __init__(
        self,
        message: str,
        *,
        conflict_check_in: Optional[datetime] = None,
        conflict_check_out: Optional[datetime] = None,
    ) -> None:
        super().__init__(message, 409)
        self.conflict_check_in = conflict_check_in
        self.conflict_check_out = conflict_check_out

    def detail(self) -> dict[str, Any]:
        if self.conflict_check_in is None or self.conflict_check_out is None:
            return {}
        return {
            'conflict_dates': {
                'check_in': self.conflict_check_in.isoformat(),
                'check_out': self.conflict_check_out.isoformat(),
            }
        }


class ForbiddenError(CustomBaseError):
    kind = 'forbidden'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class AlreadyCancelledError(CustomBaseError):
    kind = 'already_cancelled'

    def __init__(self, message: str = 'Booking is already cancelled') -> None:
        super().__init__(message, 400)


class InvalidStateError(CustomBaseError):
    kind = 'invalid_state'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthenticationError(CustomBaseError):
    kind = 'unauthenticated'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class InternalError(CustomBaseError):
    kind = 'internal_error'

    def __init__(self, message: str = 'Internal server error') -> None:
        super().__init__(message, 500)
