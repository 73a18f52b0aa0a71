"""기본 레코드 저장소 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Record Store Repository — Parent class for the audit collections.
Exposes the document-store operations the service relies on: insert with a
generated id, equality filters (including dotted ``selection.*`` paths),
ordering by one field descending, result limiting, and existence checks.

Filter keys are document field names (``empCode``, ``selection.date``);
each model maps them onto columns through its ``document_fields`` table.

Usage:
    class UnitAuditRepository(BaseRepository[UnitAudit]):
        def __init__(self) -> None:
            super().__init__(UnitAudit)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 레코드 저장소.

    Generic record store repository over one collection (table).

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    def column(self, field: str) -> Any:
        """문서 필드명(점 경로 포함)을 컬럼으로 변환합니다.

        Resolve a document field name or dotted path to a mapped column.

        Raises:
            KeyError: 알 수 없는 필드 (Unknown field for this collection)
        """
        attribute: str = self.model.document_fields[field]
        return getattr(self.model, attribute)

    def _apply_filters(self, query: Select, filters: dict[str, Any] | None) -> Select:
        # 동등 필터 적용 — Equality filters only
        for field, value in (filters or {}).items():
            query = query.where(self.column(field) == value)
        return query

    async def get_by_id(self, db: AsyncSession, record_id: UUID) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        result = await db.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def find(
        self,
        db: AsyncSession,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> Sequence[ModelType]:
        """조건에 맞는 레코드를 조회합니다.

        Retrieve records matching equality filters, optionally ordered by one
        field descending and limited.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: {문서 필드명: 값} 동등 필터 (Equality filters by document field)
            order_by: 내림차순 정렬 필드 (Field to order by, descending)
            limit: 최대 결과 수 (Maximum number of results)

        Returns:
            Sequence[ModelType]: 조회된 레코드 목록 (Matching records)
        """
        query: Select = self._apply_filters(select(self.model), filters)
        if order_by is not None:
            query = query.order_by(self.column(order_by).desc())
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return result.scalars().all()

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> ModelType:
        """새 레코드를 생성합니다 (id는 자동 생성).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 컬럼명 → 값 딕셔너리 (Column values for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def exists(self, db: AsyncSession, filters: dict[str, Any]) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: {문서 필드명: 값} 동등 필터 (Equality filters)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = self._apply_filters(select(func.count()).select_from(self.model), filters)
        count: int = (await db.execute(query)).scalar() or 0
        return count > 0
