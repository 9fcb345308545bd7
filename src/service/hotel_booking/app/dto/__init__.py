"""Application layer DTOs"""

from src.service.hotel_booking.app.dto.availability_result import AvailabilityResult
from src.service.hotel_booking.app.dto.booking_list_result import BookingListResult
from src.service.hotel_booking.app.dto.booking_view import BookingView, booking_to_dict

__all__ = [
    'AvailabilityResult',
    'BookingListResult',
    'BookingView',
    'booking_to_dict',
]
