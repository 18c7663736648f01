#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Users - one organizer and one fan
2. Create Venues - two venues
3. Create Concerts - one listing per venue, owned by the organizer

Notes:
- Tables are created first if they don't exist (alembic is preferred for real databases)
- Running it twice fails on the unique username/email of the seed users
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from pydantic import SecretStr
from sqlalchemy import text

from stagepass.platform.database.orm_db_setting import (
    Database,
    create_db_and_tables,
    dispose_engine,
    get_session_maker,
)
from stagepass.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from stagepass.service.ticketing.app.command.create_concert_use_case import CreateConcertUseCase
from stagepass.service.ticketing.app.command.create_venue_use_case import CreateVenueUseCase
from stagepass.service.ticketing.app.command.register_user_use_case import RegisterUserUseCase
from stagepass.service.ticketing.domain.entity.user_entity import UserEntity
from stagepass.service.ticketing.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from stagepass.service.ticketing.driven_adapter.repo.venue_command_repo_impl import (
    VenueCommandRepoImpl,
)
from stagepass.service.ticketing.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)

DEFAULT_PASSWORD = 'P@ssw0rd'


@dataclass
class UserConfig:
    """User seed configuration"""
    username: str
    email: str
    organizer: bool


TEST_USERS = [
    UserConfig(username='organizer', email='o@t.com', organizer=True),
    UserConfig(username='fan', email='f@t.com', organizer=False),
]

TEST_VENUES = [
    ('Madison Square Garden', '4 Pennsylvania Plaza, New York, NY'),
    ('Red Rocks Amphitheatre', '18300 W Alameda Pkwy, Morrison, CO'),
]


async def create_users() -> UserEntity:
    """Create seed users

    Returns:
        UserEntity: the organizer
    """
    print(f'👥 Creating {len(TEST_USERS)} users...')

    database = Database()
    use_case = RegisterUserUseCase(
        user_command_repo=UserCommandRepoImpl(database.session),
        user_query_repo=UserQueryRepoImpl(database.session),
        password_hasher=BcryptPasswordHasher(),
    )

    organizer = None
    for config in TEST_USERS:
        user = await use_case.register(
            username=config.username,
            email=config.email,
            password=SecretStr(DEFAULT_PASSWORD),
            organizer=config.organizer,
        )
        role_label = 'organizer' if user.organizer else 'fan'
        print(f'   ✅ Created {role_label}: ID={user.id}, Email={user.email}')
        if user.organizer:
            organizer = user

    if organizer is None:
        raise Exception('Failed to create organizer')

    print(f'   📧 Credentials: {DEFAULT_PASSWORD}')
    return organizer


async def create_venues() -> list[int]:
    print(f'🏟️ Creating {len(TEST_VENUES)} venues...')

    use_case = CreateVenueUseCase(venue_command_repo=VenueCommandRepoImpl(Database().session))
    venue_ids = []
    for name, address in TEST_VENUES:
        venue = await use_case.create(name=name, address=address)
        print(f'   ✅ Created venue: ID={venue.id}, Name={venue.name}')
        if venue.id is None:
            raise RuntimeError(f'Venue {name} was not persisted')
        venue_ids.append(venue.id)
    return venue_ids


async def create_concerts(organizer: UserEntity, venue_ids: list[int]) -> None:
    print('🎤 Creating concerts...')

    starts_at = datetime.now(timezone.utc).replace(hour=20, minute=0, second=0, microsecond=0)
    for offset, venue_id in enumerate(venue_ids, start=1):
        async with get_session_maker()() as session:
            use_case = CreateConcertUseCase(uow=SqlAlchemyUnitOfWork(session))
            created = await use_case.create(
                identity=organizer.to_identity(),
                artist=f'Demo Artist {offset}',
                venue_id=venue_id,
                tour='World Tour',
                starts_at=starts_at + timedelta(days=30 * offset),
                description='Amazing live music performance',
                genre='Rock' if offset % 2 else 'Jazz',
                ticket_type='General Admission',
                price=Decimal('49.99') * offset,
                num_avail=100 * offset,
                rules='No outside food or drink',
            )
        print(
            f'   ✅ Created concert: ID={created.concert.id}, Artist={created.concert.artist}, '
            f'Tickets={created.concert.total_tickets}'
        )


async def verify_data() -> None:
    """Verify seeded data"""
    print('🔍 Verifying seeded data...')

    async with get_session_maker()() as session:
        for table in ['user', 'venue', 'concert', 'reservation']:
            result = await session.execute(text(f'SELECT COUNT(*) FROM "{table}"'))
            print(f'   {table.capitalize()} count: {result.scalar()}')

    print('   ✅ Data verification completed!')


async def seed() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    try:
        await create_db_and_tables()
        organizer = await create_users()
        print()

        venue_ids = await create_venues()
        print()

        await create_concerts(organizer, venue_ids)
        print()

        await verify_data()

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Test accounts:')
        for user in TEST_USERS:
            role = 'Organizer' if user.organizer else 'Fan'
            print(f'   {role}: {user.email} / {DEFAULT_PASSWORD}')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await dispose_engine()


def main() -> None:
    asyncio.run(seed())


if __name__ == '__main__':
    main()
