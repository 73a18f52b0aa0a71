"""단위 감사 서비스 — 검증, 점수 계산, 중복 확인, 저장, 조회.

Unit Audit Service — Business logic for unit audit submission and retrieval.
Submission order: validate → score → guard query → insert. Validation never
touches the store; the guard query completes before the insert is issued.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.database import store_errors
from audit_report.models.unit_audit import UnitAudit
from audit_report.repositories.unit_audit_repository import unit_audit_repository
from audit_report.schemas.session import UnitAuditDraft
from audit_report.services.score_engine import UnitScore, resolve_remark_text, score_unit_audit
from audit_report.services.uniqueness_guard import ensure_unit_audit_available
from audit_report.services.validation import validate_unit_audit
from audit_report.utils.dates import is_valid_ddmmyyyy, normalize_date
from audit_report.utils.exceptions import BadRequestError, NotFoundError, SubmissionValidationError
from audit_report.utils.logging_utils import get_logger

logger = get_logger("unit_audit_service")


class UnitAuditService:
    """단위 감사 서비스.

    Unit audit service providing live scoring, submission and retrieval.
    """

    def preview(self, draft: UnitAuditDraft) -> UnitScore:
        """작성 중인 감사의 실시간 점수 (검증 없음)."""
        return score_unit_audit(
            draft.answers(),
            draft.observations.choice(),
            draft.maintenance.choice(),
        )

    async def submit(self, db: AsyncSession, draft: UnitAuditDraft) -> UnitAudit:
        """단위 감사를 검증/채점 후 저장합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            draft: 작성 완료된 감사 (Completed audit draft)

        Returns:
            UnitAudit: 저장된 감사 (Created record, not yet committed)

        Raises:
            SubmissionValidationError: 로컬 검증 실패 (422)
            ConflictError: 같은 지점/날짜의 감사가 이미 존재 (409)
            StoreError: 저장소 실패 (503)
        """
        messages = validate_unit_audit(draft)
        if messages:
            raise SubmissionValidationError(messages)

        score = self.preview(draft)
        selection = draft.selection
        branch = selection.branch.strip()
        date = normalize_date(selection.date)

        async with store_errors(db, "Error saving audit"):
            await ensure_unit_audit_available(db, branch, date)
            audit = await unit_audit_repository.create(db, {
                "branch": branch,
                "city": selection.city.strip(),
                "auditor": selection.auditor.strip(),
                "date": date,
                "kitchen": dict(draft.kitchen),
                "hygiene": dict(draft.hygiene),
                "food_safety": dict(draft.food_safety),
                "observations": resolve_remark_text(draft.observations.choice()),
                "maintenance": resolve_remark_text(draft.maintenance.choice()),
                "action_plan": resolve_remark_text(draft.action_plan.choice()),
                "score_out_of_100": score.score_out_of_100,
                "score_breakdown": score.breakdown(),
            })

        logger.info("Unit audit saved for %s on %s (score %d)", branch, date, score.score_out_of_100)
        return audit

    async def list_for(self, db: AsyncSession, branch: str, date: object) -> Sequence[UnitAudit]:
        """지점/날짜의 감사 목록 — timestamp 내림차순."""
        normalized = normalize_date(date)
        if not branch or not normalized:
            raise BadRequestError("Please select branch and date")
        if not is_valid_ddmmyyyy(normalized):
            raise BadRequestError(f"Date is invalid: {date}")
        async with store_errors(db, "Error fetching reports"):
            return await unit_audit_repository.get_by_branch_date(db, branch, normalized)

    async def get(self, db: AsyncSession, audit_id: UUID) -> UnitAudit:
        async with store_errors(db, "Error fetching audit"):
            audit = await unit_audit_repository.get_by_id(db, audit_id)
        if audit is None:
            raise NotFoundError("Unit audit not found")
        return audit

    async def latest(self, db: AsyncSession) -> UnitAudit | None:
        """가장 최근 감사 1건 — 저장소 연결 확인용."""
        async with store_errors(db, "Store connectivity test failed"):
            return await unit_audit_repository.get_latest(db)


unit_audit_service: UnitAuditService = UnitAuditService()
