"""
Unit of Work Pattern - one database transaction shared by the repositories of a write

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories get the shared session from the UoW
- Use cases coordinate repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


if TYPE_CHECKING:
    from src.service.hotel_booking.app.interface.i_booking_command_repo import (
        IBookingCommandRepo,
    )
    from src.service.hotel_booking.app.interface.i_room_repo import IRoomRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the Hotel Booking Service

    Usage:
        async with uow:
            room = await uow.room_repo.get_for_update(room_id=...)
            booking = await uow.booking_command_repo.create(booking=...)
            await uow.commit()

    Leaving the block without commit rolls back.
    """

    room_repo: IRoomRepo
    booking_command_repo: IBookingCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy implementation of Unit of Work (one session per `async with`)"""

    def __init__(self, *, get_session_maker: Callable[[], async_sessionmaker[AsyncSession]]):
        self._get_session_maker = get_session_maker
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self):
        from src.service.hotel_booking.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.hotel_booking.driven_adapter.repo.room_repo_impl import RoomRepoImpl

        self.session = self._get_session_maker()()

        # Repositories share the UoW session
        self.room_repo = RoomRepoImpl()
        self.room_repo.session = self.session
        self.booking_command_repo = BookingCommandRepoImpl()
        self.booking_command_repo.session = self.session

        return await super().__aenter__()

    async def __aexit__(self, *args):
        try:
            await super().__aexit__(*args)
        finally:
            assert self.session is not None
            await self.session.close()
            self.session = None

    async def _commit(self):
        assert self.session is not None
        await self.session.commit()

    async def rollback(self) -> None:
        assert self.session is not None
        await self.session.rollback()
