from typing import Optional

import attrs

from src.service.hotel_booking.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class AvailabilityResult:
    available: bool
    conflicting_booking: Optional[Booking] = None

    def to_dict(self) -> dict:
        conflict_dates = None
        if self.conflicting_booking is not None:
            conflict_dates = {
                'check_in': self.conflicting_booking.check_in.isoformat(),
                'check_out': self.conflicting_booking.check_out.isoformat(),
            }
        return {'available': self.available, 'conflict_dates': conflict_dates}
