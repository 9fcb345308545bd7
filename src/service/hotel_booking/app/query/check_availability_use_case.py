from datetime import datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.dto.availability_result import AvailabilityResult
from src.service.hotel_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.hotel_booking.app.interface.i_room_repo import IRoomRepo
from src.service.hotel_booking.app.service.availability_checker import AvailabilityChecker
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod


class CheckAvailabilityUseCase:
    """
    Read-only availability check

    The answer is advisory: a create for the same dates may still lose to a
    concurrent create, in which case create reports the conflict.
    """

    def __init__(self, *, room_repo: IRoomRepo, booking_query_repo: IBookingQueryRepo) -> None:
        self.room_repo = room_repo
        self.checker = AvailabilityChecker(lookup=booking_query_repo)

    @classmethod
    @inject
    def depends(
        cls,
        room_repo: IRoomRepo = Depends(Provide[Container.room_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(room_repo=room_repo, booking_query_repo=booking_query_repo)

    @Logger.io
    async def check_availability(
        self,
        *,
        room_id: Optional[int],
        check_in: Optional[datetime],
        check_out: Optional[datetime],
    ) -> AvailabilityResult:
        if room_id is None or check_in is None or check_out is None:
            raise ValidationError('Room ID, check-in date, and check-out date are required')

        room = await self.room_repo.get_by_id(room_id=room_id)
        if room is None:
            raise NotFoundError('Room not found')

        period = StayPeriod.create(check_in=check_in, check_out=check_out)
        if not room.available:
            return AvailabilityResult(available=False)

        conflict = await self.checker.has_conflict(
            room_id=room_id, check_in=period.check_in, check_out=period.check_out
        )
        return AvailabilityResult(available=conflict is None, conflicting_booking=conflict)
