from abc import ABC, abstractmethod
from typing import Optional

from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod


class IActiveBookingLookup(ABC):
    @abstractmethod
    async def find_active_overlap(self, *, room_id: int, period: StayPeriod) -> Optional[Booking]:
        """
        Return one booked (active) booking of the room whose stay overlaps period

        Cancelled and completed bookings never block a stay.
        """
        pass
