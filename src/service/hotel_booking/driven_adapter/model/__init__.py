"""ORM models (importing this package registers every table on Base.metadata)"""

from src.service.hotel_booking.driven_adapter.model.booking_model import BookingModel
from src.service.hotel_booking.driven_adapter.model.room_model import RoomModel
from src.service.hotel_booking.driven_adapter.model.user_model import UserModel


__all__ = ['BookingModel', 'RoomModel', 'UserModel']
