"""제출 검증 — 저장 전 로컬 검증 규칙.

Submission validation — Local checks run before any store access.
Each function returns the full list of human-readable messages; an empty
list means the draft may be scored and written.
"""

from audit_report.catalog import (
    ANSWERS,
    CHECKLIST_SECTIONS,
    RATING_LEVELS,
    REMARK_FIELDS,
    STAFF_PARAMETERS,
)
from audit_report.schemas.session import SelectionState, StaffEvaluationDraft, UnitAuditDraft
from audit_report.services.score_engine import RemarkKind
from audit_report.utils.dates import is_valid_ddmmyyyy, normalize_date


def validate_selection(selection: SelectionState, require_auditor: bool = True) -> list[str]:
    errors: list[str] = []
    if require_auditor and not selection.auditor.strip():
        errors.append("Auditor is required")

    normalized = normalize_date(selection.date)
    if not normalized:
        errors.append("Date is required")
    elif not is_valid_ddmmyyyy(normalized):
        errors.append(f"Date is invalid: {selection.date}")

    if not selection.branch.strip():
        errors.append("Branch is required")
    if not selection.city.strip():
        errors.append("City is required")
    return errors


def validate_unit_audit(draft: UnitAuditDraft) -> list[str]:
    """단위 감사 검증 — 헤더, 체크리스트 완결성, 비고 입력."""
    errors = validate_selection(draft.selection)

    answers = draft.answers()
    for key, (title, items) in CHECKLIST_SECTIONS.items():
        section = answers.get(key, {})
        missing = [label for label in items if section.get(label) not in ANSWERS]
        if missing:
            errors.append(f"{title} - {len(missing)} unanswered")

    for key, (label, _presets) in REMARK_FIELDS.items():
        choice = getattr(draft, key).choice()
        if choice.kind is RemarkKind.UNSET and not choice.manual:
            errors.append(f"{label} is required (choose option or enter manually)")
        elif choice.kind is RemarkKind.OTHER and not choice.manual:
            errors.append(f'{label}: you chose "Other (manual)" but did not enter text')
    return errors


def validate_staff_evaluation(draft: StaffEvaluationDraft) -> list[str]:
    """직원 평가 검증 — 이름, 사번, 모든 항목 평가."""
    errors: list[str] = []
    if not draft.staff_name.strip():
        errors.append("Staff Name is required")
    if not draft.emp_code.strip():
        errors.append("Emp Code is required")

    missing = [p for p in STAFF_PARAMETERS if draft.ratings.get(p) not in RATING_LEVELS]
    if missing:
        errors.append(f"Please rate: {', '.join(missing)}")

    errors.extend(validate_selection(draft.selection, require_auditor=False))
    return errors
