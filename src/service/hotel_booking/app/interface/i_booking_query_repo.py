from abc import abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.hotel_booking.app.interface.i_active_booking_lookup import IActiveBookingLookup


class IBookingQueryRepo(IActiveBookingLookup):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[dict]:
        """Get booking with room snapshot and owner summary"""
        pass

    @abstractmethod
    async def list_by_user_with_details(self, *, user_id: int) -> List[dict]:
        """Bookings of one user with room snapshot, newest first"""
        pass

    @abstractmethod
    async def list_all_with_details(self) -> List[dict]:
        """Every booking with room snapshot and owner summary, newest first"""
        pass
