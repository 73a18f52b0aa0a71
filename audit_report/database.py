"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
PostgreSQL (asyncpg) is the production store; SQLite (aiosqlite) is used by
the test suite and for local runs.
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import JSON
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from audit_report.config import settings
from audit_report.utils.exceptions import StoreError
from audit_report.utils.logging_utils import get_logger

logger = get_logger("database")

# 문서형 필드 — JSONB on PostgreSQL, generic JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def engine_options(database_url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션을 반환합니다.

    pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
    """
    options: dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if database_url.startswith("postgresql+asyncpg"):
        # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
        options.update(pool_size=5, max_overflow=10, connect_args={"statement_cache_size": 0})
    return options


# 비동기 데이터베이스 엔진 — Async database engine
engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def store_errors(db: AsyncSession, action: str) -> AsyncIterator[None]:
    """저장소 예외를 StoreError(503)로 변환합니다. 세션은 롤백됩니다.

    Translate SQLAlchemy failures inside the block into ``StoreError``.
    Not retried; the attempt is terminal.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        action: 실패 메시지 접두어 (e.g. "Error saving audit")
    """
    try:
        yield
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("%s: %s", action, exc)
        raise StoreError(action, exc) from exc
