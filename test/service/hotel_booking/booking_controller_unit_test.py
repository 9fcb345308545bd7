"""
HTTP tests for /api/booking

Runs the real routers, auth dependencies and exception handlers against the
in-memory adapters wired through the DI container.
"""

from collections.abc import Iterator

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.domain.enum.user_role import UserRole
from src.service.hotel_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.service.hotel_booking.booking_test_constants import (
    ADMIN_ID,
    CLOSED_ROOM_ID,
    OTHER_USER_ID,
    OWNER_ID,
    ROOM_ID,
)
from test.service.hotel_booking.in_memory_adapters import (
    InMemoryBookingQueryRepo,
    InMemoryBookingStore,
    InMemoryRoomRepo,
    InMemoryUnitOfWork,
)
from test.test_main import app


BOOKING_URL = '/api/booking'


def _auth(user_id: int, role: UserRole = UserRole.USER) -> dict[str, str]:
    token = JwtAuth().create_jwt_token(user_id=user_id, role=role)
    return {'Authorization': f'Bearer {token}'}


def _stay(check_in: str, check_out: str, room_id: int = ROOM_ID) -> dict:
    return {'room_id': room_id, 'check_in': check_in, 'check_out': check_out}


@pytest.fixture
def client(
    store: InMemoryBookingStore,
    cache_policy: BookingCachePolicy,
    booking_query_repo: InMemoryBookingQueryRepo,
) -> Iterator[TestClient]:
    container.unit_of_work.override(providers.Factory(InMemoryUnitOfWork, store))
    container.room_repo.override(providers.Object(InMemoryRoomRepo(store)))
    container.booking_query_repo.override(providers.Object(booking_query_repo))
    container.booking_cache_policy.override(providers.Object(cache_policy))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.reset_override()


def _create(client: TestClient, user_id: int, check_in: str, check_out: str, **kwargs):
    return client.post(BOOKING_URL, json=_stay(check_in, check_out, **kwargs), headers=_auth(user_id))


@pytest.mark.unit
class TestCreateBookingApi:
    def test_created_envelope(self, client: TestClient) -> None:
        response = _create(client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')

        assert response.status_code == 201
        body = response.json()
        assert body['success'] is True
        data = body['data']
        assert data['user_id'] == OWNER_ID
        assert data['status'] == 'booked'
        assert data['number_of_nights'] == 3
        assert data['total_price'] == 300
        assert data['room'] == {
            'hotel_name': 'Seaside Inn',
            'location': 'Lisbon',
            'price_per_night': 100,
        }

    def test_session_cookie_is_accepted(self, client: TestClient) -> None:
        client.cookies.set(
            settings.AUTH_COOKIE_NAME, JwtAuth().create_jwt_token(user_id=OWNER_ID)
        )

        response = client.post(
            BOOKING_URL, json=_stay('2025-01-10T00:00:00Z', '2025-01-11T00:00:00Z')
        )

        assert response.status_code == 201

    def test_requires_authentication(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_URL, json=_stay('2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')
        )

        assert response.status_code == 401
        assert response.json() == {
            'success': False,
            'error_kind': 'unauthenticated',
            'error_detail': 'Not authenticated',
        }

    def test_conflict_reports_dates(self, client: TestClient) -> None:
        _create(client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')

        response = _create(client, OTHER_USER_ID, '2025-01-12T00:00:00Z', '2025-01-14T00:00:00Z')

        assert response.status_code == 409
        body = response.json()
        assert body['error_kind'] == 'conflict'
        assert body['conflict_dates'] == {
            'check_in': '2025-01-10T00:00:00+00:00',
            'check_out': '2025-01-13T00:00:00+00:00',
        }

    def test_missing_fields(self, client: TestClient) -> None:
        response = client.post(BOOKING_URL, json={'room_id': ROOM_ID}, headers=_auth(OWNER_ID))

        assert response.status_code == 400
        assert response.json()['error_kind'] == 'validation_error'

    def test_malformed_body(self, client: TestClient) -> None:
        response = client.post(
            BOOKING_URL,
            json={'room_id': 'abc', 'check_in': 'soon', 'check_out': 'later'},
            headers=_auth(OWNER_ID),
        )

        assert response.status_code == 400
        assert response.json()['error_kind'] == 'validation_error'

    @pytest.mark.parametrize(
        'payload, error_kind',
        [
            (_stay('2025-01-13T00:00:00Z', '2025-01-10T00:00:00Z'), 'invalid_range'),
            (_stay('2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z', CLOSED_ROOM_ID), 'unavailable'),
            (_stay('2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z', 999), 'not_found'),
        ],
    )
    def test_domain_errors(self, client: TestClient, payload: dict, error_kind: str) -> None:
        response = client.post(BOOKING_URL, json=payload, headers=_auth(OWNER_ID))

        assert response.json()['error_kind'] == error_kind
        assert response.status_code == (404 if error_kind == 'not_found' else 400)


@pytest.mark.unit
class TestReadBookingApi:
    def test_my_bookings_miss_then_hit(self, client: TestClient) -> None:
        _create(client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')

        first = client.get(f'{BOOKING_URL}/my-bookings', headers=_auth(OWNER_ID)).json()['data']
        second = client.get(f'{BOOKING_URL}/my-bookings', headers=_auth(OWNER_ID)).json()['data']

        assert (first['source'], first['count']) == ('database', 1)
        assert (second['source'], second['count']) == ('cache', 1)

    def test_admin_all_requires_admin(self, client: TestClient) -> None:
        response = client.get(f'{BOOKING_URL}/admin/all', headers=_auth(OWNER_ID))

        assert response.status_code == 403
        assert response.json()['error_detail'] == 'Access denied. Admin only.'

    def test_admin_all_lists_owners(self, client: TestClient) -> None:
        _create(client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')

        response = client.get(
            f'{BOOKING_URL}/admin/all', headers=_auth(ADMIN_ID, UserRole.ADMIN)
        )

        assert response.status_code == 200
        data = response.json()['data']
        assert data['count'] == 1
        assert data['bookings'][0]['user'] == {'name': 'Alice', 'email': 'alice@hotel.com'}

    def test_get_booking_owner_only(self, client: TestClient) -> None:
        booking_id = _create(
            client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z'
        ).json()['data']['id']

        own = client.get(f'{BOOKING_URL}/{booking_id}', headers=_auth(OWNER_ID))
        other = client.get(f'{BOOKING_URL}/{booking_id}', headers=_auth(OTHER_USER_ID))
        admin = client.get(f'{BOOKING_URL}/{booking_id}', headers=_auth(ADMIN_ID, UserRole.ADMIN))

        assert own.status_code == 200
        assert own.json()['data']['id'] == booking_id
        assert other.status_code == 403
        assert admin.status_code == 403

    def test_get_booking_malformed_id(self, client: TestClient) -> None:
        response = client.get(f'{BOOKING_URL}/not-a-uuid', headers=_auth(OWNER_ID))

        assert response.status_code == 400
        assert response.json()['error_detail'] == 'Invalid booking ID'

    def test_availability(self, client: TestClient) -> None:
        _create(client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z')

        busy = client.get(
            f'{BOOKING_URL}/availability',
            params={
                'room_id': ROOM_ID,
                'check_in': '2025-01-12T00:00:00Z',
                'check_out': '2025-01-14T00:00:00Z',
            },
            headers=_auth(OTHER_USER_ID),
        ).json()['data']
        free = client.get(
            f'{BOOKING_URL}/availability',
            params={
                'room_id': ROOM_ID,
                'check_in': '2025-01-13T00:00:00Z',
                'check_out': '2025-01-15T00:00:00Z',
            },
            headers=_auth(OTHER_USER_ID),
        ).json()['data']

        assert busy['available'] is False
        assert set(busy['conflict_dates']) == {'check_in', 'check_out'}
        assert free == {'available': True, 'conflict_dates': None}


@pytest.mark.unit
class TestCancelBookingApi:
    def test_cancel_then_cancel_again(self, client: TestClient) -> None:
        booking_id = _create(
            client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z'
        ).json()['data']['id']

        first = client.put(f'{BOOKING_URL}/{booking_id}/cancel', headers=_auth(OWNER_ID))
        second = client.put(f'{BOOKING_URL}/{booking_id}/cancel', headers=_auth(OWNER_ID))

        assert first.status_code == 200
        assert first.json()['data']['status'] == 'cancelled'
        assert second.status_code == 400
        assert second.json()['error_kind'] == 'already_cancelled'

    def test_cancel_someone_elses_booking(self, client: TestClient) -> None:
        booking_id = _create(
            client, OWNER_ID, '2025-01-10T00:00:00Z', '2025-01-13T00:00:00Z'
        ).json()['data']['id']

        response = client.put(f'{BOOKING_URL}/{booking_id}/cancel', headers=_auth(OTHER_USER_ID))

        assert response.status_code == 403
        assert response.json()['error_kind'] == 'forbidden'


@pytest.mark.unit
def test_health(client: TestClient) -> None:
    assert client.get('/health').json()['status'] == 'healthy'
