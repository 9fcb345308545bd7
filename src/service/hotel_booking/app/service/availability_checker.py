from datetime import datetime
from typing import Optional

from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.interface.i_active_booking_lookup import IActiveBookingLookup
from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod


class AvailabilityChecker:
    """
    Decides whether a stay collides with an active booking of the same room.

    On the create path the lookup is the transaction-bound command repo, so the
    answer holds until the insert that follows (room row is locked).
    """

    def __init__(self, *, lookup: IActiveBookingLookup) -> None:
        self.lookup = lookup

    @Logger.io
    async def has_conflict(
        self, *, room_id: int, check_in: datetime, check_out: datetime
    ) -> Optional[Booking]:
        period = StayPeriod(check_in=check_in, check_out=check_out)
        conflict = await self.lookup.find_active_overlap(room_id=room_id, period=period)
        if conflict is not None:
            Logger.base.info(
                f'📅 [AVAILABILITY] Room {room_id} conflicts with booking {conflict.id} '
                f'({conflict.check_in.isoformat()} - {conflict.check_out.isoformat()})'
            )
        return conflict
