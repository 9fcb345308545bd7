"""Hotel Booking Domain Enums"""

from src.service.hotel_booking.domain.enum.booking_status import BookingStatus
from src.service.hotel_booking.domain.enum.user_role import UserRole

__all__ = ['BookingStatus', 'UserRole']
