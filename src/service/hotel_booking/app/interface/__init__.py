"""Application layer interfaces (Ports)"""

from src.service.hotel_booking.app.interface.i_active_booking_lookup import IActiveBookingLookup
from src.service.hotel_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.hotel_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.hotel_booking.app.interface.i_cache_store import ICacheStore
from src.service.hotel_booking.app.interface.i_room_repo import IRoomRepo


__all__ = [
    'IActiveBookingLookup',
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ICacheStore',
    'IRoomRepo',
]
