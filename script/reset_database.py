#!/usr/bin/env python3
"""
Database Reset Script
Reset PostgreSQL database structure

Features:
1. Drop & Recreate Database - completely wipe the database
2. Create Tables - btree_gist extension + ORM tables
3. Flush Redis - clear cached booking lists

Notes:
- This script only resets database structure, does not seed test data
- To seed test data, run `python -m script.seed_data`
"""

import asyncio

import redis.asyncio as aioredis
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.database.db_setting import create_db_and_tables, dispose_engine


def _parse_db_connection(database_url: str) -> tuple[str, str]:
    """Parse database URL and return (server_url, db_name)"""
    db_name = database_url.split('/')[-1]
    server_url = database_url.rsplit('/', 1)[0]
    return server_url, db_name


async def drop_and_recreate_database() -> None:
    server_url, db_name = _parse_db_connection(settings.DATABASE_URL_ASYNC)
    print(f'Database name: {db_name}')

    admin_engine = create_async_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')
    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")
            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()

    print('🏗️ Creating tables...')
    await create_db_and_tables()
    await dispose_engine()
    print('   ✅ Tables created')


async def flush_redis() -> None:
    """Flush Redis (non-critical: the cache is rebuilt on read)"""
    try:
        print('🗑️  Flushing Redis...')
        client = aioredis.from_url(
            f'redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}',
            password=settings.REDIS_PASSWORD if settings.REDIS_PASSWORD else None,
            decode_responses=True,
        )
        await client.flushdb()
        await client.aclose()
        print('✅ Redis flushed successfully!')
    except Exception as e:
        print(f'⚠️  Failed to flush Redis (non-critical): {e}')


async def main() -> None:
    print('🔄 Starting database reset...')
    print('=' * 50)

    try:
        await drop_and_recreate_database()
        print()
        await flush_redis()
        print()
        print('=' * 50)
        print('✅ Database reset completed!')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e


if __name__ == '__main__':
    asyncio.run(main())
