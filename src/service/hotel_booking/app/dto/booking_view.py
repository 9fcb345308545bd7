"""Booking read models returned by use cases."""

from typing import Optional

import attrs

from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.entity.room_entity import RoomSnapshot


def booking_to_dict(booking: Booking) -> dict:
    return {
        'id': str(booking.id),
        'user_id': booking.user_id,
        'room_id': booking.room_id,
        'check_in': booking.check_in.isoformat(),
        'check_out': booking.check_out.isoformat(),
        'total_price': booking.total_price,
        'number_of_nights': booking.number_of_nights,
        'status': str(booking.status),
        'created_at': booking.created_at.isoformat() if booking.created_at else None,
        'updated_at': booking.updated_at.isoformat() if booking.updated_at else None,
    }


@attrs.define(frozen=True)
class BookingView:
    """Booking plus the room snapshot shown next to it."""

    booking: Booking
    room: Optional[RoomSnapshot] = None

    def to_dict(self) -> dict:
        data = booking_to_dict(self.booking)
        data['room'] = self.room.to_dict() if self.room else None
        return data
