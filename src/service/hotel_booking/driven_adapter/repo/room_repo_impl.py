from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.hotel_booking.app.interface.i_room_repo import IRoomRepo
from src.service.hotel_booking.domain.entity.room_entity import Room
from src.service.hotel_booking.driven_adapter.model import RoomModel


class RoomRepoImpl(IRoomRepo):
    def __init__(
        self, session_factory: Callable[..., AsyncContextManager[AsyncSession]] | None = None
    ):
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        """Use the UoW session when injected, otherwise open one from session_factory"""
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

    @staticmethod
    def _to_entity(db_room: RoomModel) -> Room:
        return Room(
            id=db_room.id,
            hotel_name=db_room.hotel_name,
            location=db_room.location,
            price_per_night=db_room.price_per_night,
            available=db_room.available,
            created_by=db_room.created_by,
            description=db_room.description,
        )

    @Logger.io
    async def get_by_id(self, *, room_id: int) -> Optional[Room]:
        async with self._get_session() as session:
            result = await session.execute(select(RoomModel).where(RoomModel.id == room_id))
            db_room = result.scalar_one_or_none()
            return self._to_entity(db_room) if db_room else None

    @Logger.io
    async def get_for_update(self, *, room_id: int) -> Optional[Room]:
        async with self._get_session() as session:
            result = await session.execute(
                select(RoomModel).where(RoomModel.id == room_id).with_for_update()
            )
            db_room = result.scalar_one_or_none()
            return self._to_entity(db_room) if db_room else None
