import pytest

from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.domain.entity.room_entity import Room
from src.service.hotel_booking.domain.enum.user_role import UserRole
from test.service.hotel_booking.booking_test_constants import (
    ADMIN_ID,
    CACHE_TTL_SECONDS,
    CLOSED_ROOM_ID,
    OTHER_USER_ID,
    OWNER_ID,
    PRICE_PER_NIGHT,
    ROOM_ID,
)
from test.service.hotel_booking.in_memory_adapters import (
    InMemoryBookingQueryRepo,
    InMemoryBookingStore,
    InMemoryCacheStore,
    InMemoryUnitOfWork,
    UserRecord,
)


@pytest.fixture
def store() -> InMemoryBookingStore:
    store = InMemoryBookingStore()
    store.add_user(
        UserRecord(id=ADMIN_ID, name='Hotel Admin', email='admin@hotel.com', role=UserRole.ADMIN)
    )
    store.add_user(UserRecord(id=OWNER_ID, name='Alice', email='alice@hotel.com'))
    store.add_user(UserRecord(id=OTHER_USER_ID, name='Bob', email='bob@hotel.com'))
    store.add_room(
        Room(
            id=ROOM_ID,
            hotel_name='Seaside Inn',
            location='Lisbon',
            price_per_night=PRICE_PER_NIGHT,
        )
    )
    store.add_room(
        Room(
            id=CLOSED_ROOM_ID,
            hotel_name='City Central',
            location='Taipei',
            price_per_night=90,
            available=False,
        )
    )
    return store


@pytest.fixture
def uow_factory(store: InMemoryBookingStore):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def cache_policy(cache_store: InMemoryCacheStore) -> BookingCachePolicy:
    return BookingCachePolicy(cache_store=cache_store, ttl_seconds=CACHE_TTL_SECONDS)


@pytest.fixture
def booking_query_repo(store: InMemoryBookingStore) -> InMemoryBookingQueryRepo:
    return InMemoryBookingQueryRepo(store)
