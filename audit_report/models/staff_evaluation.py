"""직원 평가 SQLAlchemy ORM 모델 정의.

Staff evaluation SQLAlchemy ORM model definitions.
One row per submitted staff performance evaluation, with a flattened
snapshot of the branch/date selection it was made under.

Tables:
    - staff_evaluations: 직원 평가 기록 (Staff evaluation records, logical collection "staffEvaluations")
"""

import uuid
from datetime import datetime, timezone
from typing import Any, ClassVar

from sqlalchemy import String, Integer, DateTime, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from audit_report.database import Base, JSONDocument


class StaffEvaluation(Base):
    """직원 평가 모델 — 항목별 등급, 계산된 점수/등급, 선택 스냅샷.

    Staff evaluation model — Per-parameter ratings, derived score and grade,
    and the selection snapshot (branch, city, auditor, date) at creation time.
    Records are append-only.

    Attributes:
        id: 고유 식별자 UUID
        staff_name: 직원 이름
        emp_code: 사번 — 직원 식별 키 (Stable employee identity key)
        designation: 직책
        ratings: {항목: "Excellent"|"Good"|"Average"|"Poor", "<항목>_remarks": 텍스트}
        total_marks: 점수 문자열 (String form of the score)
        grade: 등급 A~D
        score_out_of_100: 점수 0~100 (derived from ratings)
        selection_branch / selection_city / selection_auditor / selection_date:
            선택 스냅샷 — 문서 경로 ``selection.*`` 로 조회 (Queried as ``selection.*``)
        created_at: 생성 일시 UTC — 정렬 및 최신 레코드 기준 (Ordering field)

    Constraints:
        (emp_code, selection_date) 조합은 중복 검사로만 보장
        Uniqueness of (empCode, selection.date) is enforced by the guard query.
    """

    __tablename__ = "staff_evaluations"

    # 문서 필드명(점 경로 포함) → 컬럼 속성 (Document field / dotted path → column attribute)
    document_fields: ClassVar[dict[str, str]] = {
        "id": "id",
        "staffName": "staff_name",
        "empCode": "emp_code",
        "designation": "designation",
        "grade": "grade",
        "scoreOutOf100": "score_out_of_100",
        "selection.branch": "selection_branch",
        "selection.city": "selection_city",
        "selection.auditor": "selection_auditor",
        "selection.date": "selection_date",
        "createdAt": "created_at",
    }

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    staff_name: Mapped[str] = mapped_column(String(200), nullable=False)
    emp_code: Mapped[str] = mapped_column(String(60), nullable=False)
    designation: Mapped[str] = mapped_column(String(120), default="")
    ratings: Mapped[dict[str, Any]] = mapped_column(JSONDocument, default=dict)
    total_marks: Mapped[str] = mapped_column(String(10), nullable=False)
    grade: Mapped[str] = mapped_column(String(2), nullable=False)
    score_out_of_100: Mapped[int] = mapped_column(Integer, nullable=False)
    selection_branch: Mapped[str] = mapped_column(String(120), default="")
    selection_city: Mapped[str] = mapped_column(String(120), default="")
    selection_auditor: Mapped[str] = mapped_column(String(120), default="")
    selection_date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_staff_evaluations_emp_code_date", "emp_code", "selection_date"),
        Index("ix_staff_evaluations_branch_date", "selection_branch", "selection_date"),
    )
