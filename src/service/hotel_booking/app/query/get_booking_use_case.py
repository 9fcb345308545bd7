from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.hotel_booking.domain.value_object.booking_id import parse_booking_id


class GetBookingUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def get_booking_with_details(self, *, booking_id: str | UUID, user_id: int) -> dict:
        """
        Owner-only booking detail (room snapshot + owner name/email)

        Admins get no exception here: only the booking's own user may read it.
        """
        booking_uuid = parse_booking_id(booking_id)
        booking_details = await self.booking_query_repo.get_by_id_with_details(
            booking_id=booking_uuid
        )

        if not booking_details:
            raise NotFoundError('Booking not found')

        if booking_details['user_id'] != user_id:
            raise ForbiddenError('Access denied. This booking does not belong to you.')

        return booking_details
