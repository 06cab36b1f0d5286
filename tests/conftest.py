"""
Test configuration and fixtures
"""
import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from faker import Faker
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set testing environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["APP_ENV"] = "test"
os.environ["DEBUG"] = "false"

from app.main import app
from app.core.database import Base, get_db
from app.core.security import create_access_token
from app.models import (
    Activity,
    Enrollment,
    Evaluation,
    EvidenceStatus,
    Faculty,
    Program,
    ProgramHourTarget,
    RubricLevel,
    Student,
    SustainabilityTheme,
)

fake = Faker()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh on-disk SQLite database per test"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    TestSessionLocal = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client sharing the test session; commits / rolls back like get_db"""
    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────
# Data fixtures
# ─────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def program(db_session: AsyncSession) -> Program:
    program = Program(name="Construction", code="BUILD")
    db_session.add(program)
    await db_session.flush()
    return program


@pytest_asyncio.fixture
async def levels(db_session: AsyncSession) -> dict:
    """Rubric levels keyed by position 1-5"""
    created = {pos: RubricLevel(name=f"Level {pos}", score_value=float(pos), position=pos) for pos in range(1, 6)}
    db_session.add_all(created.values())
    await db_session.flush()
    return created


@pytest_asyncio.fixture
async def theme(db_session: AsyncSession, program: Program) -> SustainabilityTheme:
    theme = SustainabilityTheme(name="Circular economy", icon="🔄", program_id=program.id)
    db_session.add(theme)
    await db_session.flush()
    return theme


@pytest_asyncio.fixture
async def student(db_session: AsyncSession, program: Program) -> Student:
    student = Student(name=fake.name(), email=fake.unique.email(), program_id=program.id)
    db_session.add(student)
    await db_session.flush()
    return student


@pytest_asyncio.fixture
async def faculty(db_session: AsyncSession, program: Program) -> Faculty:
    faculty = Faculty(full_name=fake.name(), email=fake.unique.email(), programs=[program])
    db_session.add(faculty)
    await db_session.flush()
    return faculty


@pytest_asyncio.fixture
async def target(db_session: AsyncSession, program: Program):
    from app.controllers.hours_controller import current_academic_year

    target = ProgramHourTarget(
        program_id=program.id,
        academic_year=current_academic_year(),
        hours_level1=4.0,
        hours_level2=2.0,
        hours_level3=2.0,
        hours_level4=1.0,
        hours_level5=0.0,
        hours_sustainability=2.0,
    )
    db_session.add(target)
    await db_session.flush()
    return target


@pytest.fixture
def make_activity(db_session: AsyncSession):
    async def _make(
        start_time: str,
        end_time: str,
        *,
        level: int | None = None,
        evaluation_levels=(),
        themes=(),
        created_by_faculty_id: int | None = None,
    ) -> Activity:
        activity = Activity(
            title=fake.sentence(nb_words=3),
            start_time=start_time,
            end_time=end_time,
            level=level,
            created_by_faculty_id=created_by_faculty_id,
            sustainability_themes=list(themes),
            evaluations=[
                Evaluation(criterion=f"Criterion {i}", level=lvl)
                for i, lvl in enumerate(evaluation_levels)
            ],
        )
        db_session.add(activity)
        await db_session.flush()
        return activity

    return _make


@pytest.fixture
def enroll(db_session: AsyncSession):
    async def _enroll(
        student: Student,
        activity: Activity,
        *,
        confirmed: bool = True,
        status: EvidenceStatus = EvidenceStatus.APPROVED,
    ) -> Enrollment:
        enrollment = Enrollment(
            student_id=student.id,
            activity_id=activity.id,
            participation_confirmed=confirmed,
            evidence_status=status,
        )
        db_session.add(enrollment)
        await db_session.flush()
        return enrollment

    return _enroll


@pytest.fixture
def auth_headers():
    def _headers(account, role: str) -> dict:
        token = create_access_token(account.id, account.email, role)
        return {"Authorization": f"Bearer {token}"}

    return _headers
