"""
Shared fixtures: a throwaway SQLite database per test, an HTTP client bound to
it, staff users with bearer tokens and factories for contacts and quotes.
"""
import itertools
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from app.core.repositories import ContactRepository, QuoteRepository, UserRepository
from app.core.services import ContactService, QuoteService, StatsService
from app.infrastructure.config.config import JWT_CONFIG
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.database.models import Contact, Product, QuoteRequest, User
from app.main import app as fastapi_app
from app.utils.enums import ProductStatusEnum, QuoteStatusEnum, UserRoleEnum


BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def db_connection(tmp_path):
    connection = DatabaseConnection(url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await connection.create_tables()
    yield connection
    await connection.dispose()


@pytest.fixture
async def session(db_connection):
    session = await db_connection.get_session()
    yield session
    await session.close()


@pytest.fixture
async def client(db_connection):
    fastapi_app.state.db_connection = db_connection
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    fastapi_app.state.db_connection = None


@pytest.fixture
def stats_service(session):
    return StatsService(
        quote_repository=QuoteRepository(session=session),
        contact_repository=ContactRepository(session=session),
    )


@pytest.fixture
def quote_service(session, stats_service):
    return QuoteService(
        repository=QuoteRepository(session=session),
        user_repository=UserRepository(session=session),
        stats_service=stats_service,
    )


@pytest.fixture
def contact_service(session, stats_service):
    return ContactService(
        repository=ContactRepository(session=session),
        quote_repository=QuoteRepository(session=session),
        stats_service=stats_service,
    )


async def _persist(db_connection, *items):
    session = await db_connection.get_session()
    try:
        session.add_all(items)
        await session.commit()
    finally:
        await session.close()


@pytest.fixture
def create_user(db_connection):
    counter = itertools.count(1)

    async def _create(role=UserRoleEnum.EDITOR, is_active=True, **fields) -> User:
        n = next(counter)
        user = User(
            email=fields.pop("email", f"staff{n}@example.com"),
            first_name=fields.pop("first_name", "Staff"),
            last_name=fields.pop("last_name", f"Member{n}"),
            role=role,
            is_active=is_active,
            **fields,
        )
        await _persist(db_connection, user)
        return user

    return _create


@pytest.fixture
def create_quote(db_connection):
    counter = itertools.count(1)

    async def _create(status=QuoteStatusEnum.PENDING, contact: dict | None = None, **fields) -> QuoteRequest:
        n = next(counter)
        contact_fields = {
            "first_name": "Sara",
            "last_name": f"Inquirer{n}",
            "email": f"sara{n}@example.com",
            "company": "Acme Water",
            "subject": "Quote Request",
            "message": "Quote request for: 50 m3/h",
            "gdpr_consent": True,
        }
        contact_fields.update(contact or {})
        created_at = fields.pop("created_at", BASE_TIME + timedelta(minutes=n))
        quote = QuoteRequest(
            quote_number=fields.pop("quote_number", f"Q-TEST-{n:04d}"),
            status=status,
            contact=Contact(created_at=created_at, **contact_fields),
            created_at=created_at,
            **fields,
        )
        await _persist(db_connection, quote.contact)
        return quote

    return _create


@pytest.fixture
def create_product(db_connection):
    counter = itertools.count(1)

    async def _create(status=ProductStatusEnum.ACTIVE, **fields) -> Product:
        n = next(counter)
        product = Product(
            slug=fields.pop("slug", f"product-{n}"),
            name=fields.pop("name", {"en": f"Filter {n}", "fa": f"فیلتر {n}"}),
            short_description=fields.pop("short_description", {"en": "Water filter", "fa": ""}),
            features=fields.pop("features", {"en": ["Compact"], "fa": ["جمع و جور"]}),
            applications=fields.pop("applications", {"en": ["Municipal"], "fa": []}),
            status=status,
            sort_order=fields.pop("sort_order", n),
            **fields,
        )
        await _persist(db_connection, product)
        return product

    return _create


def make_token(user: User, **claims) -> str:
    payload = {"sub": str(user.id), **claims}
    return jwt.encode(payload, JWT_CONFIG.SECRET_KEY, algorithm=JWT_CONFIG.ALGORITHM)


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}


@pytest.fixture
async def admin(create_user):
    return await create_user(role=UserRoleEnum.ADMIN, email="admin@example.com")


@pytest.fixture
async def editor(create_user):
    return await create_user(role=UserRoleEnum.EDITOR, email="editor@example.com")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def editor_headers(editor):
    return auth_headers(editor)


async def scan_status_counts(db_connection) -> dict[QuoteStatusEnum, int]:
    """Counts by walking every persisted quote, independent of the aggregator."""
    session = await db_connection.get_session()
    try:
        result = await session.execute(select(QuoteRequest.status))
        counts = {status: 0 for status in QuoteStatusEnum}
        for status in result.scalars().all():
            counts[status] += 1
        return counts
    finally:
        await session.close()
