"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import Database, get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.state.redis_client import redis_client
from src.service.hotel_booking.app.service.booking_cache_policy import BookingCachePolicy
from src.service.hotel_booking.driven_adapter.cache.redis_cache_store import RedisCacheStore
from src.service.hotel_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.hotel_booking.driven_adapter.repo.room_repo_impl import RoomRepoImpl
from src.service.hotel_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Database (uses AsyncEngineManager with settings)
    database = providers.Singleton(Database)

    # Unit of Work: new instance per write, session opened on `async with`
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, get_session_maker=get_session_maker)

    # Read repositories (stateless - use session_factory per-request)
    room_repo = providers.Singleton(RoomRepoImpl, session_factory=database.provided.session)
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )

    # Cache (client resolved lazily, Redis is initialized by the app lifespan)
    cache_store = providers.Singleton(
        RedisCacheStore.from_settings, client_factory=redis_client.get_client
    )
    booking_cache_policy = providers.Singleton(
        BookingCachePolicy,
        cache_store=cache_store,
        ttl_seconds=settings.CACHE_BOOKINGS_TTL_SECONDS,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
