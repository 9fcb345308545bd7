from uuid_utils import UUID

from src.platform.exception.exceptions import ValidationError


def parse_booking_id(raw: str | UUID) -> UUID:
    """Booking ids are UUIDs; anything else is rejected before touching storage."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        raise ValidationError('Invalid booking ID') from None
