"""단위 감사 라우터 — 점수 미리보기, 제출, 조회, PDF 다운로드.

Unit Audit Router — Live score preview, submission, retrieval by branch
and date, single record lookup and PDF download.
"""

from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.api.deps import Identity
from audit_report.database import get_db, store_errors
from audit_report.schemas.records import ScoreBreakdown, UnitAuditDocument, UnitScorePreview
from audit_report.schemas.session import UnitAuditDraft
from audit_report.services.report_service import KIND_AUDIT, PDF_MEDIA_TYPE, report_filename, report_service
from audit_report.services.unit_audit_service import unit_audit_service
from audit_report.utils.logging_utils import get_logger

router: APIRouter = APIRouter()
logger = get_logger("unit_audits")


@router.post("/score", response_model=UnitScorePreview)
async def preview_score(draft: UnitAuditDraft) -> UnitScorePreview:
    """작성 중인 감사의 실시간 점수를 계산합니다 (저장하지 않음)."""
    score = unit_audit_service.preview(draft)
    return UnitScorePreview(
        score_out_of_100=score.score_out_of_100,
        score_breakdown=ScoreBreakdown.model_validate(score.breakdown()),
    )


@router.post("", response_model=UnitAuditDocument, status_code=201)
async def submit_audit(
    draft: UnitAuditDraft,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Identity,
) -> UnitAuditDocument:
    """단위 감사를 제출합니다. 같은 지점/날짜의 감사가 있으면 409."""
    audit = await unit_audit_service.submit(db, draft)
    async with store_errors(db, "Error saving audit"):
        await db.commit()
    logger.info("Unit audit %s submitted (identity=%s)", audit.id, identity)
    return UnitAuditDocument.from_model(audit)


@router.get("", response_model=list[UnitAuditDocument])
async def list_audits(
    db: Annotated[AsyncSession, Depends(get_db)],
    branch: Annotated[str, Query()],
    date: Annotated[str, Query()],
) -> list[UnitAuditDocument]:
    """지점/날짜의 감사 목록을 최신순으로 조회합니다. 날짜는 어떤 형식이든 허용."""
    audits = await unit_audit_service.list_for(db, branch, date)
    return [UnitAuditDocument.from_model(a) for a in audits]


@router.get("/{audit_id}", response_model=UnitAuditDocument)
async def get_audit(
    audit_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UnitAuditDocument:
    audit = await unit_audit_service.get(db, audit_id)
    return UnitAuditDocument.from_model(audit)


@router.get("/{audit_id}/pdf")
async def download_audit_pdf(
    audit_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamingResponse:
    """단위 감사 PDF를 다운로드합니다."""
    document = UnitAuditDocument.from_model(await unit_audit_service.get(db, audit_id))
    filename = report_filename(document.branch, KIND_AUDIT, document.date)
    return StreamingResponse(
        BytesIO(report_service.unit_audit_pdf(document)),
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
