from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.dto.booking_list_result import BookingListResult
from src.service.hotel_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.hotel_booking.app.service.booking_cache_policy import (
    ALL_BOOKINGS_KEY,
    GLOBAL_GENERATION_KEY,
    BookingCachePolicy,
    user_bookings_key,
    user_generation_key,
)


class ListBookingsUseCase:
    """Booking lists served read-through: cache first, database on miss or cache failure"""

    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, cache_policy: BookingCachePolicy
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.cache_policy = cache_policy

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        cache_policy: BookingCachePolicy = Depends(Provide[Container.booking_cache_policy]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, cache_policy=cache_policy)

    @Logger.io
    async def list_for_user(self, *, user_id: int) -> BookingListResult:
        async def load() -> list[dict]:
            return await self.booking_query_repo.list_by_user_with_details(user_id=user_id)

        return await self.cache_policy.read_through(
            key=user_bookings_key(user_id),
            generation_key=user_generation_key(user_id),
            scope='user',
            loader=load,
        )

    @Logger.io
    async def list_all(self) -> BookingListResult:
        """Every booking with owner summary (admin only, enforced by the caller)"""
        return await self.cache_policy.read_through(
            key=ALL_BOOKINGS_KEY,
            generation_key=GLOBAL_GENERATION_KEY,
            scope='all',
            loader=self.booking_query_repo.list_all_with_details,
        )
