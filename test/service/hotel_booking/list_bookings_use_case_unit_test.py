"""
Unit tests for ListBookingsUseCase (read-through cache)

Test Focus:
1. Miss -> database -> cache populated with TTL; next call is a hit
2. Newest first, room snapshot per item, owner summary only in the admin list
3. Cache failure degrades to database reads
. A read that loaded before a create and filled after it leaves no stale entry behind
"""

import asyncio

import pytest

from src.service.hotel_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.hotel_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.hotel_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from test.service.hotel_booking.booking_test_constants import (
    CACHE_TTL_SECONDS,
    OTHER_USER_ID,
    OWNER_ID,
    ROOM_ID,
    utc,
)
from test.service.hotel_booking.in_memory_adapters import (
    FailingCacheStore,
    InMemoryBookingQueryRepo,
    InMemoryBookingStore,
    InMemoryCacheStore,
    seed_booking,
)


class GatedBookingQueryRepo(InMemoryBookingQueryRepo):
    """Holds list_by_user_with_details after it has read the store"""

    def __init__(self, store: InMemoryBookingStore) -> None:
        super().__init__(store)
        self.loaded = asyncio.Event()
        self.release = asyncio.Event()
        self.gated = True

    async def list_by_user_with_details(self, *, user_id: int) -> list[dict]:
        items = await super().list_by_user_with_details(user_id=user_id)
        if self.gated:
            self.gated = False
            self.loaded.set()
            await self.release.wait()
        return items


@pytest.mark.unit
class TestListBookings:
    @pytest.fixture
    def use_case(
        self, booking_query_repo: InMemoryBookingQueryRepo, cache_policy: BookingCachePolicy
    ) -> ListBookingsUseCase:
        return ListBookingsUseCase(booking_query_repo=booking_query_repo, cache_policy=cache_policy)

    @pytest.fixture
    def seeded(self, store: InMemoryBookingStore) -> None:
        seed_booking(
            store,
            user_id=OWNER_ID,
            room_id=ROOM_ID,
            check_in=utc(2025, 1, 10),
            check_out=utc(2025, 1, 13),
            created_at=utc(2024, 12, 1),
        )
        seed_booking(
            store,
            user_id=OWNER_ID,
            room_id=ROOM_ID,
            check_in=utc(2025, 2, 1),
            check_out=utc(2025, 2, 3),
            created_at=utc(2024, 12, 5),
        )
        seed_booking(
            store,
            user_id=OTHER_USER_ID,
            room_id=ROOM_ID,
            check_in=utc(2025, 3, 1),
            check_out=utc(2025, 3, 2),
            created_at=utc(2024, 12, 3),
        )

    @pytest.mark.asyncio
    @pytest.mark.usefixtures('seeded')
    async def test_miss_then_hit(
        self,
        use_case: ListBookingsUseCase,
        booking_query_repo: InMemoryBookingQueryRepo,
        cache_store: InMemoryCacheStore,
    ) -> None:
        first = await use_case.list_for_user(user_id=OWNER_ID)
        second = await use_case.list_for_user(user_id=OWNER_ID)

        assert first.source == 'database'
        assert second.source == 'cache'
        assert second.items == first.items
        assert booking_query_repo.list_by_user_calls == 1
        assert cache_store.ttls[f'user:{OWNER_ID}:bookings:v0'] == CACHE_TTL_SECONDS

    @pytest.mark.asyncio
    @pytest.mark.usefixtures('seeded')
    async def test_user_list_is_newest_first_with_room_snapshot(
        self, use_case: ListBookingsUseCase
    ) -> None:
        result = await use_case.list_for_user(user_id=OWNER_ID)

        assert [item['check_in'][:10] for item in result.items] == ['2025-02-01', '2025-01-10']
        assert all(item['user_id'] == OWNER_ID for item in result.items)
        assert all(item['room']['location'] == 'Lisbon' for item in result.items)
        assert all('user' not in item for item in result.items)

    @pytest.mark.asyncio
    @pytest.mark.usefixtures('seeded')
    async def test_all_list_includes_owner_summary(
        self, use_case: ListBookingsUseCase, cache_store: InMemoryCacheStore
    ) -> None:
        result = await use_case.list_all()

        assert result.source == 'database'
        assert len(result.items) == 3
        assert [item['user']['name'] for item in result.items] == ['Alice', 'Bob', 'Alice']
        assert 'bookings:all:v0' in cache_store.data

    @pytest.mark.asyncio
    @pytest.mark.usefixtures('seeded')
    async def test_failing_cache_falls_back_to_database(
        self, booking_query_repo: InMemoryBookingQueryRepo
    ) -> None:
        use_case = ListBookingsUseCase(
            booking_query_repo=booking_query_repo,
            cache_policy=BookingCachePolicy(cache_store=FailingCacheStore(), ttl_seconds=1800),
        )

        first = await use_case.list_for_user(user_id=OWNER_ID)
        second = await use_case.list_all()

        assert first.source == 'database'
        assert len(first.items) == 2
        assert second.source == 'database'
        assert len(second.items) == 3

    @pytest.mark.asyncio
    async def test_mutations_never_serve_stale_lists(
        self, use_case: ListBookingsUseCase, uow_factory, cache_policy: BookingCachePolicy
    ) -> None:
        create = CreateBookingUseCase(uow_factory=uow_factory, cache_policy=cache_policy)
        cancel = CancelBookingUseCase(uow_factory=uow_factory, cache_policy=cache_policy)

        assert (await use_case.list_for_user(user_id=OWNER_ID)).items == []
        assert (await use_case.list_all()).items == []

        view = await create.create_booking(
            user_id=OWNER_ID, room_id=ROOM_ID, check_in=utc(2025, 1, 10), check_out=utc(2025, 1, 13)
        )
        after_create = await use_case.list_for_user(user_id=OWNER_ID)
        assert [item['id'] for item in after_create.items] == [str(view.booking.id)]
        assert after_create.items[0]['status'] == 'booked'
        assert len((await use_case.list_all()).items) == 1

        await cancel.cancel_booking(booking_id=str(view.booking.id), user_id=OWNER_ID)
        after_cancel = await use_case.list_for_user(user_id=OWNER_ID)
        assert after_cancel.source == 'database'
        assert after_cancel.items[0]['status'] == 'cancelled'
        assert (await use_case.list_all()).items[0]['status'] == 'cancelled'

    @pytest.mark.asyncio
    async def test_read_racing_a_create_does_not_refill_stale_list(
        self, store: InMemoryBookingStore, uow_factory, cache_policy: BookingCachePolicy
    ) -> None:
        gated_repo = GatedBookingQueryRepo(store)
        use_case = ListBookingsUseCase(booking_query_repo=gated_repo, cache_policy=cache_policy)
        create = CreateBookingUseCase(uow_factory=uow_factory, cache_policy=cache_policy)

        racing_read = asyncio.create_task(use_case.list_for_user(user_id=OWNER_ID))
        await gated_repo.loaded.wait()
        view = await create.create_booking(
            user_id=OWNER_ID, room_id=ROOM_ID, check_in=utc(2025, 1, 10), check_out=utc(2025, 1, 13)
        )
        gated_repo.release.set()
        stale = await racing_read

        after = await use_case.list_for_user(user_id=OWNER_ID)

        assert stale.items == []
        assert after.source == 'database'
        assert [item['id'] for item in after.items] == [str(view.booking.id)]
