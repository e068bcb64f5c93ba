"""
Shared fixtures for the marketplace test suite.

Every test gets its own SQLite file database (aiosqlite) built from the ORM
metadata, so service tests exercise real SQL, including the conditional
UPDATE guards, without a PostgreSQL server.
"""

import bcrypt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.models import Base
from app.models.base import get_db
from app.models.job import Job
from app.models.user import User
from app.services.auth_service import hash_password

_real_gensalt = bcrypt.gensalt


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt work factor; hashing cost is irrelevant to behaviour."""
    monkeypatch.setattr(bcrypt, "gensalt", lambda rounds=4, prefix=b"2b": _real_gensalt(4, prefix))


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session
        await session.rollback()


async def make_user(db: AsyncSession, name: str, role: str, email: str | None = None) -> User:
    user = User(
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        hashed_password=hash_password("password123"),
        role=role,
        skills=[],
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_job(db: AsyncSession, client: User, **overrides) -> Job:
    values = {
        "title": "Landing page redesign",
        "description": "Redesign our product landing page with a modern look.",
        "category": "design",
        "budget_min": 200.0,
        "budget_max": 500.0,
        "duration": "1-2 weeks",
        "client_id": client.id,
        "status": "open",
        "skills_required": ["Figma", "UI Design"],
        "attachments": [],
    }
    values.update(overrides)
    job = Job(**values)
    db.add(job)
    await db.commit()
    await db.refresh(job)
    return job


@pytest.fixture
async def client_user(db):
    return await make_user(db, "Carol Client", "client")


@pytest.fixture
async def other_client(db):
    return await make_user(db, "Oscar Owner", "client")


@pytest.fixture
async def freelancer(db):
    return await make_user(db, "Fiona Freelancer", "freelancer")


@pytest.fixture
async def second_freelancer(db):
    return await make_user(db, "Sam Second", "freelancer")


@pytest.fixture
async def open_job(db, client_user):
    return await make_job(db, client_user)


@pytest.fixture
async def api(session_factory):
    """HTTP client against the app, with ``get_db`` bound to the test database."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def register(api: AsyncClient, name: str, role: str, email: str | None = None) -> dict:
    """Register through the API; the client keeps the session cookie."""
    response = await api.post(
        "/api/v1/auth/register",
        json={
            "name": name,
            "email": email or f"{name.lower().replace(' ', '.')}@example.com",
            "password": "password123",
            "role": role,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
