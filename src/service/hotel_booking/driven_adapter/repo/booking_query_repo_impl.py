from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.dto.booking_view import booking_to_dict
from src.service.hotel_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.hotel_booking.domain.entity.booking_entity import Booking
from src.service.hotel_booking.domain.value_object.stay_period import StayPeriod
from src.service.hotel_booking.driven_adapter.model import BookingModel
from src.service.hotel_booking.driven_adapter.repo.booking_command_repo_impl import (
    booking_model_to_entity,
    overlap_clause,
    to_db_uuid,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """
        Get session for query execution.

        If session is injected (from UoW), yield it directly without context management.
        Otherwise, use session_factory context manager.
        """
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_booking_dict(db_booking: BookingModel, *, include_user: bool) -> dict:
        """
        JSON-ready booking dict (also the cached payload)

        room/user are display snapshots taken at read time.
        """
        data = booking_to_dict(booking_model_to_entity(db_booking))

        room = db_booking.room
        data['room'] = (
            {
                'hotel_name': room.hotel_name,
                'location': room.location,
                'price_per_night': room.price_per_night,
            }
            if room
            else None
        )

        if include_user:
            user = db_booking.user
            data['user'] = {'name': user.name, 'email': user.email} if user else None
        return data

    @Logger.io
    async def get_by_id_with_details(self, *, booking_id: UUID) -> Optional[dict]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == to_db_uuid(booking_id))
            )
            db_booking = result.scalar_one_or_none()
            if not db_booking:
                return None
            return self._to_booking_dict(db_booking, include_user=True)

    @Logger.io
    async def list_by_user_with_details(self, *, user_id: int) -> List[dict]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [
                self._to_booking_dict(db_booking, include_user=False)
                for db_booking in result.scalars().all()
            ]

    @Logger.io
    async def list_all_with_details(self) -> List[dict]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).order_by(BookingModel.created_at.desc())
            )
            return [
                self._to_booking_dict(db_booking, include_user=True)
                for db_booking in result.scalars().all()
            ]

    @Logger.io
    async def find_active_overlap(self, *, room_id: int, period: StayPeriod) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(overlap_clause(room_id=room_id, period=period))
                .order_by(BookingModel.check_in)
                .limit(1)
            )
            db_booking = result.scalar_one_or_none()
            return booking_model_to_entity(db_booking) if db_booking else None
