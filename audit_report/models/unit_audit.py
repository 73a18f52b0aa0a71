"""단위 감사 SQLAlchemy ORM 모델 정의.

Unit audit SQLAlchemy ORM model definitions.
One row per submitted health-and-safety audit of a branch kitchen.

Tables:
    - unit_audits: 단위 감사 기록 (Unit audit records, logical collection "unitAudits")
"""

import uuid
from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy import String, Integer, DateTime, Text, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from audit_report.database import Base, JSONDocument


class UnitAudit(Base):
    """단위 감사 모델 — 체크리스트 응답, 비고, 계산된 점수.

    Unit audit model — Checklist answers, resolved remarks and the derived score.
    Records are append-only: created once, never updated or deleted.

    Attributes:
        id: 고유 식별자 UUID
        branch: 지점명 (Branch name, uniqueness key with date)
        city: 도시
        auditor: 감사자 이름
        date: 감사 날짜 "DD/MM/YYYY" (Canonical date string)
        kitchen / hygiene / food_safety: {항목 라벨: "Yes"|"No"}
        observations / maintenance / action_plan: 확정된 비고 텍스트
        score_out_of_100: 최종 점수 0~100 (derived, never user supplied)
        score_breakdown: {checklist, observations, maintenance, totalBeforeClamp, maxChecklist}
        timestamp: 생성 일시 UTC — 정렬 기준 (Creation instant, ordering field)

    Constraints:
        (branch, date) 조합은 중복 검사로만 보장 (조회 인덱스만 존재)
        Uniqueness of (branch, date) is enforced by the guard query, not the store.
    """

    __tablename__ = "unit_audits"

    # 문서 필드명 → 컬럼 속성 (Document field name → column attribute)
    document_fields: ClassVar[dict[str, str]] = {
        "id": "id",
        "branch": "branch",
        "city": "city",
        "auditor": "auditor",
        "date": "date",
        "scoreOutOf100": "score_out_of_100",
        "timestamp": "timestamp",
    }

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    branch: Mapped[str] = mapped_column(String(120), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    auditor: Mapped[str] = mapped_column(String(120), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    kitchen: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    hygiene: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    food_safety: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    observations: Mapped[str] = mapped_column(Text, default="-")
    maintenance: Mapped[str] = mapped_column(Text, default="-")
    action_plan: Mapped[str] = mapped_column(Text, default="-")
    score_out_of_100: Mapped[int] = mapped_column(Integer, nullable=False)
    score_breakdown: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_unit_audits_branch_date", "branch", "date"),
    )
