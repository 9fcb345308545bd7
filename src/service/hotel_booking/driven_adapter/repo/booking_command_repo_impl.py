"""
Booking Command Repository Implementation

Runs on the Unit of Work session; commit/rollback belong to the caller, except for an
overlap rejected by the exclusion constraint: that rolls the aborted transaction back
to read the colliding booking.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncContextManager, AsyncIterator, Callable, Optional
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError, InternalError
from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.enum.booking_status import BookingStatus
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod
from src.service.hotel_booking.driven_adapter.model import BookingModel
from src.service.hotel_booking.driven_adapter.model.booking_model import (
    BOOKING_NO_OVERLAP_CONSTRAINT,
)


def to_db_uuid(booking_id: UUID | uuid.UUID | str) -> uuid.UUID:
    # SQLAlchemy PG_UUID(as_uuid=True) binds stdlib uuid.UUID
    return uuid.UUID(str(booking_id))


def booking_model_to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=UUID(str(db_booking.id)),  # stdlib uuid.UUID -> uuid_utils.UUID
        user_id=db_booking.user_id,
        room_id=db_booking.room_id,
        check_in=db_booking.check_in,
        check_out=db_booking.check_out,
        total_price=db_booking.total_price,
        number_of_nights=db_booking.number_of_nights,
        status=BookingStatus(db_booking.status),
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def overlap_clause(*, room_id: int, period: StayPeriod):
    return (
        (BookingModel.room_id == room_id)
        & (BookingModel.status == BookingStatus.BOOKED.value)
        & (BookingModel.check_in < period.check_out)
        & (BookingModel.check_out > period.check_in)
    )


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            try:
                result = await session.execute(
                    select(BookingModel).where(BookingModel.id == to_db_uuid(booking_id))
                )
            except SQLAlchemyError as e:
                raise InternalError('Failed to load booking') from e
            db_booking = result.scalar_one_or_none()
            return booking_model_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def find_active_overlap(self, *, room_id: int, period: StayPeriod) -> Optional[Booking]:
        async with self._get_session() as session:
            try:
                result = await session.execute(
                    select(BookingModel)
                    .where(overlap_clause(room_id=room_id, period=period))
                    .order_by(BookingModel.check_in)
                    .limit(1)
                )
            except SQLAlchemyError as e:
                raise InternalError('Failed to check room availability') from e
            db_booking = result.scalar_one_or_none()
            return booking_model_to_entity(db_booking) if db_booking else None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            db_booking = BookingModel(
                id=to_db_uuid(booking.id),
                user_id=booking.user_id,
                room_id=booking.room_id,
                check_in=booking.check_in,
                check_out=booking.check_out,
                total_price=booking.total_price,
                number_of_nights=booking.number_of_nights,
                status=booking.status.value,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
            session.add(db_booking)
            try:
                await session.flush()
            except IntegrityError as e:
                if BOOKING_NO_OVERLAP_CONSTRAINT in str(e.orig):
                    Logger.base.warning(
                        f'🛑 [BOOKING] Overlap rejected by database for room {booking.room_id}'
                    )
                    raise await self._overlap_conflict(session=session, booking=booking) from e
                raise InternalError('Failed to create booking') from e
            except SQLAlchemyError as e:
                raise InternalError('Failed to create booking') from e

            await session.refresh(db_booking)
            return booking_model_to_entity(db_booking)

    async def _overlap_conflict(self, *, session: AsyncSession, booking: Booking) -> ConflictError:
        # The failed flush aborted the transaction
        await session.rollback()
        try:
            existing = await self.find_active_overlap(
                room_id=booking.room_id, period=booking.period
            )
        except InternalError as e:
            Logger.base.warning(f'⚠️ [BOOKING] Could not read the colliding booking: {e}')
            existing = None

        if existing is None:
            return ConflictError('The room is already booked for the selected dates')
        return ConflictError(
            'The room is already booked for the selected dates',
            conflict_check_in=existing.check_in,
            conflict_check_out=existing.check_out,
        )

    @Logger.io
    async def update_status(self, *, booking: Booking, expected_status: BookingStatus) -> bool:
        async with self._get_session() as session:
            try:
                result = await session.execute(
                    update(BookingModel)
                    .where(
                        BookingModel.id == to_db_uuid(booking.id),
                        BookingModel.status == expected_status.value,
                    )
                    .values(
                        status=booking.status.value,
                        updated_at=booking.updated_at or datetime.now(timezone.utc),
                    )
                )
            except SQLAlchemyError as e:
                raise InternalError('Failed to update booking status') from e
            return result.rowcount == 1
