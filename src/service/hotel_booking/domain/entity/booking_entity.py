from datetime import datetime, timezone
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import AlreadyCancelledError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.domain.enum.booking_status import BookingStatus
from src.service.hotel_booking.domain.pricing import calculate_nights, calculate_total_price
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod


@attrs.define
class Booking:
    id: UUID
    user_id: int
    room_id: int
    check_in: datetime
    check_out: datetime
    total_price: int
    number_of_nights: int
    status: BookingStatus = BookingStatus.BOOKED
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        user_id: int,
        room_id: int,
        period: StayPeriod,
        price_per_night: int,
    ) -> 'Booking':
        nights = calculate_nights(period.check_in, period.check_out)
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            room_id=room_id,
            check_in=period.check_in,
            check_out=period.check_out,
            total_price=calculate_total_price(nights=nights, price_per_night=price_per_night),
            number_of_nights=nights,
            status=BookingStatus.BOOKED,
            created_at=now,
            updated_at=now,
        )

    @property
    def period(self) -> StayPeriod:
        return StayPeriod(check_in=self.check_in, check_out=self.check_out)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.BOOKED

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    @Logger.io
    def cancel(self) -> 'Booking':
        """
        Cancel booking (booked -> cancelled, one way)

        Raises:
            AlreadyCancelledError: booking was cancelled before
            InvalidStateError: booking is completed
        """
        if self.status == BookingStatus.CANCELLED:
            raise AlreadyCancelledError()
        if self.status == BookingStatus.COMPLETED:
            raise InvalidStateError('Cannot cancel a completed booking')

        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )
