from abc import abstractmethod
from typing import Optional

from uuid_utils import UUID

from src.service.hotel_booking.app.interface.i_active_booking_lookup import IActiveBookingLookup
from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.enum.booking_status import BookingStatus


class IBookingCommandRepo(IActiveBookingLookup):
    """
    Repository interface for booking writes

    Responsibilities:
    - Overlap check inside the create transaction
    - Insert new bookings
    - Conditional status transitions (booked -> cancelled)
    """

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert booking

        Raises:
            ConflictError: storage rejected an overlapping active booking
        """
        pass

    @abstractmethod
    async def update_status(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        """
        Persist booking.status only if the stored status still equals expected_status

        Returns:
            False when another writer changed the status first
        """
        pass
