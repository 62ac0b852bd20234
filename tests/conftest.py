import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING MODE
# Must happen BEFORE importing app.main: settings and the engine are
# built at import time.
# ------------------------------------------------------------------
os.environ["TESTING"] = "true"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./portal_test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("INSTITUTION_EMAIL_DOMAIN", "mahindrauniversity.edu.in")
# Uploads are mocked; no real storage bucket
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_KEY"] = ""
os.environ.pop("REDIS_URL", None)

from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.main import app
from app.api.deps import get_db_session
from app.core.security import create_access_token, hash_password
from app.models.project import Project
from app.models.user import User, UserRole

PASSWORD = "password123"
DOMAIN = "mahindrauniversity.edu.in"

_password_hash = None


def password_hash() -> str:
    # bcrypt is slow; hash the shared test password once
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(PASSWORD)
    return _password_hash


@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh SQLite database file per test."""
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}",
        connect_args={"check_same_thread": False},
        poolclass=NullPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """
    httpx >= 0.27 client over ASGITransport. Every request gets its own
    session on the per-test database, like production.
    """
    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# DATA HELPERS
# ------------------------------------------------------------------
def bearer_headers(user: User) -> dict:
    token = create_access_token(subject=str(user.id), data={"role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return bearer_headers


@pytest.fixture
def make_user(db_session):
    async def _make(name: str, role: UserRole, email: str | None = None, **fields) -> User:
        local = name.lower().replace(" ", ".").replace("dr.", "")
        user = User(
            name=name,
            email=email or f"{local.strip('.')}@{DOMAIN}",
            password_hash=password_hash(),
            role=role,
            **fields,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_project(db_session):
    async def _make(faculty: User, title: str = "Graph Neural Networks for Traffic", **fields) -> Project:
        project = Project(
            faculty_id=faculty.id,
            title=title,
            description=fields.pop("description", "Forecasting congestion with GNNs"),
            domain=fields.pop("domain", "Machine Learning"),
            **fields,
        )
        db_session.add(project)
        await db_session.commit()
        await db_session.refresh(project)
        return project

    return _make


@pytest_asyncio.fixture
async def faculty(make_user):
    return await make_user("Dr. Vikram Sen", UserRole.Faculty)


@pytest_asyncio.fixture
async def other_faculty(make_user):
    return await make_user("Dr. Meera Iyer", UserRole.Faculty)


@pytest_asyncio.fixture
async def student(make_user):
    return await make_user("Asha Rao", UserRole.Student, program="B.Tech")


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user("Portal Admin", UserRole.Admin, email="admin@example.com")


@pytest_asyncio.fixture
async def project(make_project, faculty):
    return await make_project(faculty)
