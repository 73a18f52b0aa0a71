"""직원 평가 서비스 — 검증, 점수/등급 계산, 중복 확인, 저장, 조회, 이력 집계.

Staff Evaluation Service — Business logic for staff evaluation submission,
retrieval, name suggestions and per-employee history.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.catalog import REMARKS_SUFFIX, STAFF_PARAMETERS
from audit_report.config import settings
from audit_report.database import store_errors
from audit_report.models.staff_evaluation import StaffEvaluation
from audit_report.repositories.staff_evaluation_repository import staff_evaluation_repository
from audit_report.schemas.records import StaffEvaluationDocument, StaffScorePreview, StaffSuggestion
from audit_report.schemas.session import StaffEvaluationDraft
from audit_report.services.aggregation_service import StaffSummary, dedupe_records, summarize_staff
from audit_report.services.score_engine import grade_for_score, score_staff_ratings, staff_score_summary
from audit_report.services.uniqueness_guard import ensure_staff_evaluation_available, normalize_emp_code
from audit_report.services.validation import validate_staff_evaluation
from audit_report.utils.dates import is_valid_ddmmyyyy, normalize_date, to_calendar_date
from audit_report.utils.exceptions import BadRequestError, NotFoundError, SubmissionValidationError
from audit_report.utils.logging_utils import get_logger

logger = get_logger("staff_evaluation_service")


def _stored_ratings(ratings: dict[str, str]) -> dict[str, str]:
    # 알려진 항목의 등급과 비어있지 않은 항목별 비고만 저장
    stored: dict[str, str] = {}
    for parameter in STAFF_PARAMETERS:
        if parameter in ratings:
            stored[parameter] = ratings[parameter]
        remark = ratings.get(f"{parameter}{REMARKS_SUFFIX}", "").strip()
        if remark:
            stored[f"{parameter}{REMARKS_SUFFIX}"] = remark
    return stored


def _check_range(date_from: object, date_to: object) -> None:
    for name, bound in (("date_from", date_from), ("date_to", date_to)):
        if bound and to_calendar_date(bound) is None:
            raise BadRequestError(f"{name} is not a valid date: {bound}")


class StaffEvaluationService:
    """직원 평가 서비스.

    Staff evaluation service providing live scoring, submission, retrieval,
    name suggestions and employee history aggregation.
    """

    def preview(self, ratings: dict[str, str]) -> StaffScorePreview:
        score, total_marks, grade = staff_score_summary(ratings)
        return StaffScorePreview(score_out_of_100=score, total_marks=total_marks, grade=grade)

    async def submit(self, db: AsyncSession, draft: StaffEvaluationDraft) -> StaffEvaluation:
        """직원 평가를 검증/채점 후 저장합니다.

        Raises:
            SubmissionValidationError: 로컬 검증 실패 (422)
            ConflictError: 같은 사번/날짜의 평가가 이미 존재 (409)
            StoreError: 저장소 실패 (503)
        """
        messages = validate_staff_evaluation(draft)
        if messages:
            raise SubmissionValidationError(messages)

        # 검증을 통과했으므로 모든 항목이 응답됨 — None이 될 수 없음
        score = score_staff_ratings(draft.ratings)
        selection = draft.selection
        emp_code = normalize_emp_code(draft.emp_code)
        date = normalize_date(selection.date)

        async with store_errors(db, "Error saving evaluation"):
            await ensure_staff_evaluation_available(db, emp_code, date)
            evaluation = await staff_evaluation_repository.create(db, {
                "staff_name": draft.staff_name.strip(),
                "emp_code": emp_code,
                "designation": draft.designation.strip(),
                "ratings": _stored_ratings(draft.ratings),
                "total_marks": str(score),
                "grade": grade_for_score(score),
                "score_out_of_100": score,
                "selection_branch": selection.branch.strip(),
                "selection_city": selection.city.strip(),
                "selection_auditor": selection.auditor.strip(),
                "selection_date": date,
            })

        logger.info("Staff evaluation saved for %s on %s (score %d)", emp_code, date, score)
        return evaluation

    async def list_for(self, db: AsyncSession, branch: str, date: object) -> Sequence[StaffEvaluation]:
        """지점/날짜의 평가 목록 — createdAt 내림차순."""
        normalized = normalize_date(date)
        if not branch or not normalized:
            raise BadRequestError("Please select branch and date")
        if not is_valid_ddmmyyyy(normalized):
            raise BadRequestError(f"Date is invalid: {date}")
        async with store_errors(db, "Error fetching reports"):
            return await staff_evaluation_repository.get_by_branch_date(db, branch, normalized)

    async def list_for_branch(self, db: AsyncSession, branch: str) -> Sequence[StaffEvaluation]:
        if not branch:
            raise BadRequestError("Please select branch")
        async with store_errors(db, "Error fetching reports"):
            return await staff_evaluation_repository.get_by_branch(db, branch)

    async def get(self, db: AsyncSession, evaluation_id: UUID) -> StaffEvaluation:
        async with store_errors(db, "Error fetching evaluation"):
            evaluation = await staff_evaluation_repository.get_by_id(db, evaluation_id)
        if evaluation is None:
            raise NotFoundError("Staff evaluation not found")
        return evaluation

    async def latest_for(
        self, db: AsyncSession, emp_code: str | None = None, staff_name: str | None = None
    ) -> StaffEvaluation:
        """사번(우선) 또는 이름으로 가장 최근 평가를 조회합니다."""
        emp_code = normalize_emp_code(emp_code)
        staff_name = (staff_name or "").strip()
        if not emp_code and not staff_name:
            raise BadRequestError("emp_code or staff_name is required")
        async with store_errors(db, "Error fetching previous evaluation"):
            evaluation = await staff_evaluation_repository.get_latest_for(
                db, emp_code=emp_code or None, staff_name=staff_name or None
            )
        if evaluation is None:
            raise NotFoundError("No previous evaluation found")
        return evaluation

    async def suggestions(self, db: AsyncSession, prefix: str) -> list[StaffSuggestion]:
        """직원 이름 자동완성 — 최근 N건에서 대소문자 무시 접두어 검색.

        Scans the newest ``SUGGESTION_SCAN_LIMIT`` records (newest first) and
        keeps one entry per (name, code) pair, carrying that pair's most
        recent record.
        """
        prefix_lower = (prefix or "").strip().lower()
        if not prefix_lower:
            return []

        async with store_errors(db, "Error searching staff names"):
            recent = await staff_evaluation_repository.get_recent(db, settings.SUGGESTION_SCAN_LIMIT)

        seen: set[str] = set()
        unique: list[StaffSuggestion] = []
        for evaluation in recent:
            name = (evaluation.staff_name or "").strip()
            if not name or not name.lower().startswith(prefix_lower):
                continue
            code = (evaluation.emp_code or "").strip()
            key = f"{name.lower()}::{code}"
            if key in seen:
                continue
            seen.add(key)
            unique.append(StaffSuggestion(
                staff_name=name,
                emp_code=code,
                designation=evaluation.designation or "",
                last_record=StaffEvaluationDocument.from_model(evaluation),
            ))
        return unique

    async def employee_history(
        self,
        db: AsyncSession,
        emp_code: str | None = None,
        staff_name: str | None = None,
        date_from: object = None,
        date_to: object = None,
    ) -> StaffSummary:
        """사번 조회와 이름 조회 결과를 합쳐 중복 제거 후 집계합니다.

        A record found by both lookups is counted once.
        """
        emp_code = normalize_emp_code(emp_code)
        staff_name = (staff_name or "").strip()
        if not emp_code and not staff_name:
            raise BadRequestError("emp_code or staff_name is required")
        _check_range(date_from, date_to)

        found: list[StaffEvaluation] = []
        async with store_errors(db, "Error fetching employee history"):
            if emp_code:
                found.extend(await staff_evaluation_repository.get_by_emp_code(db, emp_code))
            if staff_name:
                found.extend(await staff_evaluation_repository.get_by_staff_name(db, staff_name))

        records = dedupe_records(StaffEvaluationDocument.from_model(e).as_record() for e in found)
        return summarize_staff(records, date_from, date_to)

    async def branch_summary(
        self, db: AsyncSession, branch: str, date_from: object = None, date_to: object = None
    ) -> StaffSummary:
        """지점의 평가를 기간으로 걸러 직원별/항목별로 집계합니다."""
        _check_range(date_from, date_to)
        evaluations = await self.list_for_branch(db, branch)
        records = [StaffEvaluationDocument.from_model(e).as_record() for e in evaluations]
        return summarize_staff(records, date_from, date_to)


staff_evaluation_service: StaffEvaluationService = StaffEvaluationService()
