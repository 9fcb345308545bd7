#!/usr/bin/env python3
"""
Database Seed Script
Populate test data into the database

Features:
1. Ensure Tables - create extensions and tables if missing
2. Create Users - 1 admin + 2 regular users
3. Create Rooms - a handful of rooms (one of them closed for booking)
4. Print Tokens - session tokens for trying the API locally

Notes:
- Users and rooms are owned by other services in production; this script only
  fills a local database
"""

import asyncio
from dataclasses import dataclass

from sqlalchemy import select, text

from src.platform.database.db_setting import create_db_and_tables, dispose_engine, get_session_maker
from src.service.hotel_booking.domain.enum.user_role import UserRole
from src.service.hotel_booking.driven_adapter.model import RoomModel, UserModel
from src.service.hotel_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


@dataclass
class UserConfig:
    """User seed configuration"""
    email: str
    name: str
    role: UserRole


@dataclass
class RoomConfig:
    """Room seed configuration"""
    hotel_name: str
    location: str
    price_per_night: int
    available: bool = True
    description: str | None = None


TEST_USERS = [
    UserConfig(email='admin@hotel.com', name='Hotel Admin', role=UserRole.ADMIN),
    UserConfig(email='alice@hotel.com', name='Alice', role=UserRole.USER),
    UserConfig(email='bob@hotel.com', name='Bob', role=UserRole.USER),
]

TEST_ROOMS = [
    RoomConfig('Seaside Inn', 'Lisbon', 100, description='Double room with ocean view'),
    RoomConfig('Seaside Inn', 'Lisbon', 180, description='Suite with balcony'),
    RoomConfig('Mountain Lodge', 'Innsbruck', 140, description='Cabin near the ski lift'),
    RoomConfig('City Central', 'Taipei', 90, available=False, description='Under renovation'),
]


async def create_users(session) -> dict[str, UserModel]:
    print(f'👥 Creating {len(TEST_USERS)} users...')
    created: dict[str, UserModel] = {}

    for config in TEST_USERS:
        result = await session.execute(select(UserModel).where(UserModel.email == config.email))
        user = result.scalar_one_or_none()
        if user is None:
            user = UserModel(email=config.email, name=config.name, role=config.role.value)
            session.add(user)
            await session.flush()
            print(f'   ✅ Created {config.role.value}: ID={user.id}, Email={user.email}')
        else:
            print(f'   ⏭️  Exists {config.role.value}: ID={user.id}, Email={user.email}')
        created[config.email] = user

    return created


async def create_rooms(session, *, owner_id: int) -> None:
    print(f'🏨 Creating {len(TEST_ROOMS)} rooms...')

    result = await session.execute(select(RoomModel.id))
    if result.first() is not None:
        print('   ⏭️  Rooms already seeded')
        return

    for config in TEST_ROOMS:
        room = RoomModel(
            hotel_name=config.hotel_name,
            location=config.location,
            price_per_night=config.price_per_night,
            available=config.available,
            created_by=owner_id,
            description=config.description,
        )
        session.add(room)
        await session.flush()
        status = 'open' if config.available else 'closed'
        print(f'   ✅ Created room: ID={room.id}, {room.hotel_name} ({room.location}) {status}')


async def verify_data(session) -> None:
    print('🔍 Verifying seeded data...')
    for table in ['user', 'room', 'booking']:
        table_name = f'"{table}"' if table == 'user' else table
        result = await session.execute(text(f'SELECT COUNT(*) FROM {table_name}'))
        print(f'   {table.capitalize()} count: {result.scalar()}')


def print_tokens(users: dict[str, UserModel]) -> None:
    print('🔑 Session tokens (cookie "token" or Authorization: Bearer):')
    jwt_auth = JwtAuth()
    for user in users.values():
        token = jwt_auth.create_jwt_token(user_id=user.id, role=UserRole(user.role))
        print(f'   {user.email}: {token}')


async def main() -> None:
    print('🌱 Seeding database...')
    await create_db_and_tables()

    try:
        async with get_session_maker()() as session:
            users = await create_users(session)
            await create_rooms(session, owner_id=users['admin@hotel.com'].id)
            await session.commit()
            await verify_data(session)
        print_tokens(users)
        print('✅ Seed complete')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())
