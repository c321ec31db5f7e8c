"""
OJT Hours Tracker - Test Configuration and Fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator, Dict, List

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set testing environment
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["EMAIL_PROVIDER"] = "log"
os.environ["APP_BASE_URL"] = "https://ojt.example.test/"
os.environ["ADMIN_PASSWORD"] = ""
os.environ["LOG_FORMAT"] = "console"
os.environ["DEBUG"] = "false"

from ojt_tracker.core.security import create_access_token, get_password_hash
from ojt_tracker.db.base import Base
from ojt_tracker.db.session import get_db
from ojt_tracker.main import app
from ojt_tracker.models.entry import Entry
from ojt_tracker.models.user import User
from ojt_tracker.services.notifications import Notifier, get_notifier

fake = Faker()

TEST_PASSWORD = "testpassword123"


class RecordingNotifier(Notifier):
    """Keeps every message; can be switched to fail every send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Dict[str, str]] = []

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        self.sent.append({"recipient": recipient, "subject": subject, "body": body})
        return not self.fail

    @property
    def name(self) -> str:
        return "recording"


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite file per test; several sessions may share it."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
async def client(db_session: AsyncSession, notifier: RecordingNotifier) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and notifier overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def make_user(db_session: AsyncSession, is_admin: bool = False, **fields) -> User:
    user = User(
        email=fields.pop("email", fake.unique.email().lower()),
        password_hash=get_password_hash(TEST_PASSWORD),
        name=fields.pop("name", fake.name()),
        employee_number=fields.pop("employee_number", str(fake.random_int(10000, 99999))),
        is_admin=is_admin,
        **fields,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def make_entry(db_session: AsyncSession, user: User, **fields) -> Entry:
    entry = Entry(
        user_id=user.id,
        date=fields.pop("date", date(2024, 3, 1)),
        location=fields.pop("location", fake.city()),
        method=fields.pop("method", "ET"),
        hours=fields.pop("hours", 2.5),
        verified=fields.pop("verified", False),
        **fields,
    )
    db_session.add(entry)
    await db_session.commit()
    await db_session.refresh(entry)
    return entry


def headers_for(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await make_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await make_user(db_session)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await make_user(db_session, is_admin=True)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    return headers_for(admin_user)


def supervisor_payload(**overrides) -> dict:
    payload = {
        "name": fake.name(),
        "email": fake.unique.email(),
        "phone": fake.numerify("555-###-####"),
        "certification_level": "Level II",
        "company": fake.company(),
    }
    payload.update(overrides)
    return payload
