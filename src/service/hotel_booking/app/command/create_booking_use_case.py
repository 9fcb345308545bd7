from datetime import datetime
import time
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    ConflictError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.hotel_booking.app.dto.booking_view import BookingView
from src.service.hotel_booking.app.service.availability_checker import AvailabilityChecker
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod


class CreateBookingUseCase:
    """
    Create booking use case

    Flow (single transaction):
    1. Validate required input
    2. Lock room row (serializes creates for the same room)
    3. Room must exist and be available
    4. Validate stay range
    5. Overlap check against active bookings
    6. Price the stay, insert, commit
    7. Invalidate cached booking lists

    Dependencies:
    - uow_factory: opens a Unit of Work per call
    - cache_policy: cache invalidation after commit
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        cache_policy: BookingCachePolicy,
    ) -> None:
        self.uow_factory = uow_factory
        self.cache_policy = cache_policy
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        cache_policy: BookingCachePolicy = Depends(Provide[Container.booking_cache_policy]),
    ) -> Self:
        return cls(uow_factory=uow_factory, cache_policy=cache_policy)

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        room_id: Optional[int],
        check_in: Optional[datetime],
        check_out: Optional[datetime],
    ) -> BookingView:
        """
        Create a booked reservation for user_id

        Raises:
            ValidationError: room_id, check_in or check_out missing
            NotFoundError: room does not exist
            UnavailableError: room is not open for booking
            InvalidRangeError: check_out <= check_in
            ConflictError: an active booking of the room overlaps the stay
        """
        if room_id is None or check_in is None or check_out is None:
            raise ValidationError('Room ID, check-in date, and check-out date are required')

        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'booking.user_id': user_id, 'booking.room_id': room_id},
        ):
            try:
                view = await self._create_in_transaction(
                    user_id=user_id, room_id=room_id, check_in=check_in, check_out=check_out
                )
            except ConflictError:
                metrics.record_conflict()
                metrics.record_operation(operation='create', result=ConflictError.kind)
                raise
            except Exception as e:
                metrics.record_operation(
                    operation='create', result=getattr(e, 'kind', 'internal_error')
                )
                raise

            metrics.record_operation(operation='create', result='success')
            Logger.base.info(
                f'📝 [CREATE-BOOKING] {view.booking.id} room {room_id} for user {user_id}: '
                f'{view.booking.number_of_nights} nights, total {view.booking.total_price}'
            )

            # After commit: a reader must not repopulate the cache with pre-commit data
            await self.cache_policy.invalidate_after_mutation(user_id=user_id)
            return view

    async def _create_in_transaction(
        self, *, user_id: int, room_id: int, check_in: datetime, check_out: datetime
    ) -> BookingView:
        started = time.perf_counter()
        async with self.uow_factory() as uow:
            room = await uow.room_repo.get_for_update(room_id=room_id)
            if room is None:
                raise NotFoundError('Room not found')
            if not room.available:
                raise UnavailableError('Room is not available for booking')

            period = StayPeriod.create(check_in=check_in, check_out=check_out)

            checker = AvailabilityChecker(lookup=uow.booking_command_repo)
            conflict = await checker.has_conflict(
                room_id=room_id, check_in=period.check_in, check_out=period.check_out
            )
            if conflict is not None:
                raise ConflictError(
                    'The room is already booked for the selected dates',
                    conflict_check_in=conflict.check_in,
                    conflict_check_out=conflict.check_out,
                )

            booking = Booking.create(
                id=uuid_utils.uuid7(),
                user_id=user_id,
                room_id=room_id,
                period=period,
                price_per_night=room.price_per_night,
            )
            created = await uow.booking_command_repo.create(booking=booking)
            await uow.commit()

        metrics.booking_create_duration.observe(time.perf_counter() - started)
        return BookingView(booking=created, room=room.snapshot())
