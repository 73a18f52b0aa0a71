"""레코드 문서 스키마 — 저장된 감사/평가의 응답 및 내보내기 형태.

Record document schemas — The stored shape of unit audits and staff
evaluations, as returned by the API and written to JSON exports.
Serialized in camelCase (``scoreOutOf100``, ``foodSafety``, ``empCode``).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from audit_report.models.staff_evaluation import StaffEvaluation
from audit_report.models.unit_audit import UnitAudit

_DOCUMENT_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoreBreakdown(BaseModel):
    """단위 감사 점수 분해 (Unit audit score breakdown)."""

    model_config = _DOCUMENT_CONFIG

    checklist: int = 0
    observations: int = 0
    maintenance: int = 0
    total_before_clamp: int = 0
    max_checklist: int = 0


class UnitAuditDocument(BaseModel):
    """단위 감사 문서 (Stored unit audit)."""

    model_config = _DOCUMENT_CONFIG

    id: str
    branch: str
    city: str
    auditor: str
    date: str
    kitchen: dict[str, str] = Field(default_factory=dict)
    hygiene: dict[str, str] = Field(default_factory=dict)
    food_safety: dict[str, str] = Field(default_factory=dict)
    observations: str = "-"
    maintenance: str = "-"
    action_plan: str = "-"
    score_out_of_100: int
    score_breakdown: ScoreBreakdown
    timestamp: datetime

    @classmethod
    def from_model(cls, audit: UnitAudit) -> "UnitAuditDocument":
        return cls(
            id=str(audit.id),
            branch=audit.branch,
            city=audit.city,
            auditor=audit.auditor,
            date=audit.date,
            kitchen=audit.kitchen or {},
            hygiene=audit.hygiene or {},
            food_safety=audit.food_safety or {},
            observations=audit.observations,
            maintenance=audit.maintenance,
            action_plan=audit.action_plan,
            score_out_of_100=audit.score_out_of_100,
            score_breakdown=ScoreBreakdown.model_validate(audit.score_breakdown or {}),
            timestamp=audit.timestamp,
        )


class SelectionSnapshot(BaseModel):
    """평가 당시 선택 스냅샷."""

    branch: str = ""
    city: str = ""
    auditor: str = ""
    date: str = ""


class StaffEvaluationDocument(BaseModel):
    """직원 평가 문서 (Stored staff evaluation)."""

    model_config = _DOCUMENT_CONFIG

    id: str
    staff_name: str
    emp_code: str
    designation: str = ""
    ratings: dict[str, str] = Field(default_factory=dict)
    total_marks: str
    grade: str
    score_out_of_100: int
    selection: SelectionSnapshot
    created_at: datetime

    @classmethod
    def from_model(cls, evaluation: StaffEvaluation) -> "StaffEvaluationDocument":
        return cls(
            id=str(evaluation.id),
            staff_name=evaluation.staff_name,
            emp_code=evaluation.emp_code,
            designation=evaluation.designation,
            ratings=evaluation.ratings or {},
            total_marks=evaluation.total_marks,
            grade=evaluation.grade,
            score_out_of_100=evaluation.score_out_of_100,
            selection=SelectionSnapshot(
                branch=evaluation.selection_branch,
                city=evaluation.selection_city,
                auditor=evaluation.selection_auditor,
                date=evaluation.selection_date,
            ),
            created_at=evaluation.created_at,
        )

    def as_record(self) -> dict[str, Any]:
        """집계 입력용 dict (camelCase 키, datetime 유지)."""
        return self.model_dump(by_alias=True)


class StaffSuggestion(BaseModel):
    """직원 이름 자동완성 후보."""

    model_config = _DOCUMENT_CONFIG

    staff_name: str
    emp_code: str
    designation: str = ""
    last_record: StaffEvaluationDocument | None = None


class UnitScorePreview(BaseModel):
    """단위 감사 실시간 점수 미리보기."""

    model_config = _DOCUMENT_CONFIG

    score_out_of_100: int
    score_breakdown: ScoreBreakdown


class StaffScorePreview(BaseModel):
    """직원 평가 실시간 점수 미리보기 — 응답이 없으면 점수 None, 문자열은 빈 값."""

    model_config = _DOCUMENT_CONFIG

    score_out_of_100: int | None = None
    total_marks: str = ""
    grade: str = ""


class StoreHealth(BaseModel):
    """저장소 연결 확인 결과 (Store quick test result)."""

    status: str = "ok"
    message: str
