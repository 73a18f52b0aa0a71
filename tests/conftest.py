"""테스트 인프라 — 임시 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Temporary SQLite (aiosqlite) database, session, and
httpx client fixtures. Each test gets a fresh database file under tmp_path;
the schema is created from the ORM metadata.
"""

import os

# 앱 임포트 전에 설정 — settings are read when audit_report.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["AXIOM_DATASET"] = ""

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from audit_report.catalog import CHECKLIST_SECTIONS, STAFF_PARAMETERS  # noqa: E402
from audit_report.database import Base, get_db  # noqa: E402
from audit_report.main import app  # noqa: E402
from audit_report.models import *  # noqa: F401,F403,E402 — register all models with metadata


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 DB 파일."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'audit_report.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼: 요청 본문 생성 (Request body builders)
# ---------------------------------------------------------------------------
def all_answers(value: str = "Yes") -> dict[str, dict[str, str]]:
    """모든 체크리스트 항목에 같은 응답을 채웁니다."""
    return {key: {label: value for label in items} for key, (_title, items) in CHECKLIST_SECTIONS.items()}


def unit_audit_body(
    branch: str = "Koramangala",
    date: str = "01/06/2024",
    answer: str = "Yes",
    observations: str = "No issues observed",
    maintenance: str = "No maintenance required",
    **overrides: Any,
) -> dict[str, Any]:
    """완성된 단위 감사 제출 본문 (camelCase)."""
    answers = all_answers(answer)
    body: dict[str, Any] = {
        "selection": {
            "branch": branch,
            "city": "Bangalore",
            "auditor": "Kumar Kannaiyan",
            "date": date,
            "type": "unit",
        },
        "kitchen": answers["kitchen"],
        "hygiene": answers["hygiene"],
        "foodSafety": answers["food_safety"],
        "observations": {"preset": observations, "manual": ""},
        "maintenance": {"preset": maintenance, "manual": ""},
        "actionPlan": {"preset": "Follow-up audit in 7 days", "manual": ""},
    }
    body.update(overrides)
    return body


def staff_evaluation_body(
    emp_code: str = "E01",
    staff_name: str = "Ravi Kumar",
    date: str = "15/03/2024",
    branch: str = "HSR Layout",
    rating: str = "Good",
    ratings: dict[str, str] | None = None,
) -> dict[str, Any]:
    """완성된 직원 평가 제출 본문 (camelCase)."""
    return {
        "selection": {
            "branch": branch,
            "city": "Bangalore",
            "auditor": "Kumar Kannaiyan",
            "date": date,
            "type": "staff",
        },
        "staffName": staff_name,
        "empCode": emp_code,
        "designation": "Cook",
        "ratings": ratings if ratings is not None else {p: rating for p in STAFF_PARAMETERS},
    }


@pytest.fixture
def unit_body() -> dict[str, Any]:
    return unit_audit_body()


@pytest.fixture
def staff_body() -> dict[str, Any]:
    return staff_evaluation_body()
