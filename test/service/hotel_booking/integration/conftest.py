"""
PostgreSQL fixtures for integration tests

Connection settings come from the environment / .env (POSTGRES_DB defaults to
hotel_booking_test_db, see test/conftest.py). The database is created when missing,
tables are created and truncated per test. Tests skip when PostgreSQL is unreachable.
"""

from typing import AsyncIterator, Callable

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import Base
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.driven_adapter.model import RoomModel, UserModel
from test.service.hotel_booking.booking_test_constants import (
    ADMIN_ID,
    CACHE_TTL_SECONDS,
    OTHER_USER_ID,
    OWNER_ID,
    PRICE_PER_NIGHT,
    ROOM_ID,
)
from test.service.hotel_booking.in_memory_adapters import InMemoryCacheStore


async def _ensure_test_database() -> None:
    postgres_url = settings.DATABASE_URL_ASYNC.rsplit('/', 1)[0] + '/postgres'
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT', poolclass=NullPool)
    try:
        async with engine.connect() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'),
                {'name': settings.POSTGRES_DB},
            )
            if result.scalar() is None:
                await conn.execute(text(f'CREATE DATABASE "{settings.POSTGRES_DB}"'))
    finally:
        await engine.dispose()


async def _seed(session_maker: async_sessionmaker[AsyncSession]) -> None:
    async with session_maker() as session:
        session.add_all(
            [
                UserModel(id=ADMIN_ID, name='Hotel Admin', email='admin@hotel.com', role='admin'),
                UserModel(id=OWNER_ID, name='Alice', email='alice@hotel.com'),
                UserModel(id=OTHER_USER_ID, name='Bob', email='bob@hotel.com'),
                RoomModel(
                    id=ROOM_ID,
                    hotel_name='Seaside Inn',
                    location='Lisbon',
                    price_per_night=PRICE_PER_NIGHT,
                    available=True,
                ),
            ]
        )
        await session.commit()


@pytest.fixture
async def session_maker() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    try:
        await _ensure_test_database()
    except (OSError, SQLAlchemyError) as e:
        pytest.skip(f'PostgreSQL unavailable: {e}')

    # NullPool: every concurrent unit of work gets its own connection
    engine = create_async_engine(settings.DATABASE_URL_ASYNC, poolclass=NullPool)
    try:
        async with engine.begin() as conn:
            await conn.execute(text('CREATE EXTENSION IF NOT EXISTS btree_gist'))
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
            await conn.execute(text('TRUNCATE booking, room, "user" RESTART IDENTITY'))

        maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        await _seed(maker)
        yield maker
    finally:
        await engine.dispose()


@pytest.fixture
def pg_uow_factory(
    session_maker: async_sessionmaker[AsyncSession],
) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(get_session_maker=lambda: session_maker)


@pytest.fixture
def cache_policy() -> BookingCachePolicy:
    return BookingCachePolicy(cache_store=InMemoryCacheStore(), ttl_seconds=CACHE_TTL_SECONDS)
