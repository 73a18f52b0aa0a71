"""세션 상태 스키마 — 선택, 작성 중인 감사/평가, 조회 필터.

Session state schemas — Branch selection, in-progress audit and evaluation
drafts, and retrieval filters as explicit immutable values.

Every change is a pure transition returning a new instance, so the scoring
and validation code always receives the full state as an argument. The drafts
double as the request bodies of the submit and score-preview endpoints.
Fields serialize in camelCase and accept either camelCase or snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from audit_report.catalog import (
    CHECKLIST_SECTIONS,
    REMARK_FIELDS,
    REMARKS_SUFFIX,
    SELECT_PLACEHOLDER,
    city_for_branch,
)
from audit_report.services.score_engine import RemarkChoice
from audit_report.utils.dates import normalize_date, today_ddmmyyyy

_STATE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# === 선택 (Selection) ===

class SelectionState(BaseModel):
    """지점/유형 선택 스냅샷 — 레코드에 함께 저장됩니다.

    Attributes:
        branch: 지점명 (Branch)
        city: 도시 (City, derived from the branch map)
        auditor: 감사자 (Auditor name)
        date: 날짜 — 임의 형식 허용, 저장 시 DD/MM/YYYY로 정규화
        type: "unit" | "staff"
    """

    model_config = _STATE_CONFIG

    branch: str = ""
    city: str = ""
    auditor: str = ""
    date: str = ""
    type: str = ""


def choose_selection(
    branch: str,
    report_type: str,
    auditor: str,
    now: datetime | None = None,
) -> SelectionState:
    """선택 화면의 결과 — 도시는 지점에서, 날짜는 오늘(로컬)로 채웁니다."""
    return SelectionState(
        branch=branch,
        city=city_for_branch(branch),
        auditor=auditor,
        date=today_ddmmyyyy(now),
        type=report_type,
    )


# === 단위 감사 (Unit audit draft) ===

class RemarkInput(BaseModel):
    """비고 입력 — 프리셋 선택과 수동 입력 텍스트."""

    model_config = _STATE_CONFIG

    preset: str = SELECT_PLACEHOLDER
    manual: str = ""

    def choice(self) -> RemarkChoice:
        return RemarkChoice.from_input(self.preset, self.manual)


class UnitAuditDraft(BaseModel):
    """작성 중인 단위 감사 (In-progress unit audit)."""

    model_config = _STATE_CONFIG

    selection: SelectionState = Field(default_factory=SelectionState)
    kitchen: dict[str, str] = Field(default_factory=dict)
    hygiene: dict[str, str] = Field(default_factory=dict)
    food_safety: dict[str, str] = Field(default_factory=dict)
    observations: RemarkInput = Field(default_factory=RemarkInput)
    maintenance: RemarkInput = Field(default_factory=RemarkInput)
    action_plan: RemarkInput = Field(default_factory=RemarkInput)

    def answers(self) -> dict[str, dict[str, str]]:
        """섹션 키 → 응답 매핑 (Section key → item answers)."""
        return {key: dict(getattr(self, key)) for key in CHECKLIST_SECTIONS}

    def with_answer(self, section: str, label: str, value: str) -> "UnitAuditDraft":
        if section not in CHECKLIST_SECTIONS:
            raise KeyError(section)
        updated = {**getattr(self, section), label: value}
        return self.model_copy(update={section: updated})

    def with_remark_preset(self, which: str, preset: str) -> "UnitAuditDraft":
        """프리셋 선택 — "Other"가 아니면 수동 입력을 비웁니다."""
        if which not in REMARK_FIELDS:
            raise KeyError(which)
        current: RemarkInput = getattr(self, which)
        manual = current.manual if "other" in preset.lower() else ""
        return self.model_copy(update={which: RemarkInput(preset=preset, manual=manual)})

    def with_remark_manual(self, which: str, text: str) -> "UnitAuditDraft":
        if which not in REMARK_FIELDS:
            raise KeyError(which)
        current: RemarkInput = getattr(self, which)
        return self.model_copy(update={which: RemarkInput(preset=current.preset, manual=text)})


# === 직원 평가 (Staff evaluation draft) ===

class StaffEvaluationDraft(BaseModel):
    """작성 중인 직원 평가 (In-progress staff evaluation)."""

    model_config = _STATE_CONFIG

    selection: SelectionState = Field(default_factory=SelectionState)
    staff_name: str = ""
    emp_code: str = ""
    designation: str = ""
    ratings: dict[str, str] = Field(default_factory=dict)

    def with_rating(self, parameter: str, value: str) -> "StaffEvaluationDraft":
        return self.model_copy(update={"ratings": {**self.ratings, parameter: value}})

    def with_rating_remark(self, parameter: str, text: str) -> "StaffEvaluationDraft":
        key = f"{parameter}{REMARKS_SUFFIX}"
        return self.model_copy(update={"ratings": {**self.ratings, key: text}})

    def with_staff_details(self, staff_name: str, emp_code: str, designation: str = "") -> "StaffEvaluationDraft":
        return self.model_copy(update={
            "staff_name": staff_name,
            "emp_code": emp_code,
            "designation": designation,
        })

    def cleared(self) -> "StaffEvaluationDraft":
        """제출 후 다음 직원 입력을 위해 선택만 남기고 초기화합니다."""
        return StaffEvaluationDraft(selection=self.selection)


# === 조회 필터 (Retrieval filters) ===

class RetrieveFilters(BaseModel):
    """보고서 조회 필터 (Report retrieval filters)."""

    model_config = _STATE_CONFIG

    branch: str = ""
    report_type: str = "unit"
    date: str = ""
    date_from: str = ""
    date_to: str = ""

    def with_branch(self, branch: str) -> "RetrieveFilters":
        return self.model_copy(update={"branch": branch})

    def with_date(self, value: object) -> "RetrieveFilters":
        return self.model_copy(update={"date": normalize_date(value)})

    def with_range(self, date_from: object = None, date_to: object = None) -> "RetrieveFilters":
        return self.model_copy(update={
            "date_from": normalize_date(date_from),
            "date_to": normalize_date(date_to),
        })
