"""Pytest configuration and fixtures."""

import os

# Settings are cached on first import; point the app at SQLite before that happens.
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.clients.gateway import WorkoutGateway
from app.db.base import Base
from app.db.session import get_db
from app.main import create_application
import app.models  # noqa: F401 - register all tables on Base.metadata
from app.schemas.routine import RoutineExercise, RoutineRead
from tests.fakes import FakeClock, SequentialIds

BASE_URL = "http://testserver/api/v1"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 4, 1, 18, 0, tzinfo=timezone.utc))


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


# ---------------------------------------------------------------------------
# Database / HTTP app
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def api_app(db_engine):
    """App instance whose get_db dependency uses the per-test engine."""
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application = create_application()
    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(api_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as c:
        yield c


@pytest.fixture
async def gateway(api_app) -> AsyncGenerator[WorkoutGateway, None]:
    """Gateway client talking to the in-process service."""
    async with WorkoutGateway(base_url=BASE_URL, transport=httpx.ASGITransport(app=api_app)) as gw:
        yield gw


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def push_routine() -> RoutineRead:
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    return RoutineRead(
        id="routine-push",
        name="Push Day",
        description="Chest, shoulders, triceps",
        difficulty="intermediate",
        category="strength",
        estimated_duration=60,
        target_muscle_groups=["chest", "shoulders", "triceps"],
        exercises=[
            RoutineExercise(exercise_id="bench-press", name="Bench Press", sets=4, reps=8, rest_time=120),
            RoutineExercise(exercise_id="overhead-press", name="Overhead Press", sets=3, reps=10, rest_time=90),
            RoutineExercise(
                exercise_id="tricep-pushdowns", name="Tricep Pushdowns", sets=2, reps=15, rest_time=60, notes="slow"
            ),
        ],
        created_at=now,
        updated_at=now,
        is_custom=True,
    )


@pytest.fixture
def sample_routine_payload() -> dict:
    """Valid camelCase payload for POST /routines."""
    return {
        "name": "Leg Day",
        "description": "Squat focus",
        "difficulty": "beginner",
        "category": "strength",
        "estimatedDuration": 45,
        "targetMuscleGroups": ["quads", "glutes", "quads"],
        "exercises": [
            {"exerciseId": "squats", "name": "Squats", "sets": 3, "reps": 5, "restTime": 180},
            {"exerciseId": "leg-curls", "name": "Leg Curls", "sets": 2, "reps": 12, "restTime": 60},
        ],
        "isCustom": True,
    }
