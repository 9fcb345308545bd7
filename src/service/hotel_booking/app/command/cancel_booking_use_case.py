from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    AlreadyCancelledError,
    ForbiddenError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.hotel_booking.app.dto.booking_view import BookingView
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.domain.enum.booking_status import BookingStatus
from src.service.hotel_booking.domain.value_object.booking_id import parse_booking_id


class CancelBookingUseCase:
    """
    Cancel booking (booked -> cancelled)

    The status write is conditional on the stored status still being booked,
    so of two concurrent cancels only one succeeds; the other sees AlreadyCancelledError.
    The freed dates are bookable again as soon as the transaction commits.
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
    async def cancel_booking(self, *, booking_id: str | UUID, user_id: int) -> BookingView:
        booking_id = parse_booking_id(booking_id)
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'booking.user_id': user_id},
        ):
            try:
                view = await self._cancel_in_transaction(booking_id=booking_id, user_id=user_id)
            except Exception as e:
                metrics.record_operation(
                    operation='cancel', result=getattr(e, 'kind', 'internal_error')
                )
                raise

            metrics.record_operation(operation='cancel', result='success')
            Logger.base.info(f'🚫 [CANCEL-BOOKING] {booking_id} cancelled by user {user_id}')

            await self.cache_policy.invalidate_after_mutation(user_id=user_id)
            return view

    async def _cancel_in_transaction(self, *, booking_id: UUID, user_id: int) -> BookingView:
        async with self.uow_factory() as uow:
            booking = await uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking not found')
            if not booking.is_owned_by(user_id):
                raise ForbiddenError('Access denied. This booking does not belong to you.')

            # Raises AlreadyCancelledError / InvalidStateError before any write
            cancelled = booking.cancel()

            updated = await uow.booking_command_repo.update_status(
                booking=cancelled, expected_status=BookingStatus.BOOKED
            )
            if not updated:
                # Lost the race against another cancel
                raise AlreadyCancelledError()

            room = await uow.room_repo.get_by_id(room_id=booking.room_id)
            await uow.commit()

        return BookingView(booking=cancelled, room=room.snapshot() if room else None)
