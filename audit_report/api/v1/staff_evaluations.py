"""직원 평가 라우터 — 점수 미리보기, 제출, 조회, 이름 자동완성, PDF 다운로드.

Staff Evaluation Router — Live score preview, submission, retrieval,
latest-record lookup, name suggestions and PDF download.
"""

from io import BytesIO
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.api.deps import Identity
from audit_report.database import get_db, store_errors
from audit_report.schemas.records import StaffEvaluationDocument, StaffScorePreview, StaffSuggestion
from audit_report.schemas.requests import StaffScoreRequest
from audit_report.schemas.session import StaffEvaluationDraft
from audit_report.services.report_service import (
    KIND_STAFF_EVAL,
    PDF_MEDIA_TYPE,
    report_filename,
    report_service,
)
from audit_report.services.staff_evaluation_service import staff_evaluation_service
from audit_report.utils.logging_utils import get_logger

router: APIRouter = APIRouter()
logger = get_logger("staff_evaluations")


@router.post("/score", response_model=StaffScorePreview)
async def preview_score(data: StaffScoreRequest) -> StaffScorePreview:
    """응답된 항목만으로 실시간 점수/등급을 계산합니다."""
    return staff_evaluation_service.preview(data.ratings)


@router.post("", response_model=StaffEvaluationDocument, status_code=201)
async def submit_evaluation(
    draft: StaffEvaluationDraft,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Identity,
) -> StaffEvaluationDocument:
    """직원 평가를 제출합니다. 같은 사번/날짜의 평가가 있으면 409."""
    evaluation = await staff_evaluation_service.submit(db, draft)
    async with store_errors(db, "Error saving evaluation"):
        await db.commit()
    logger.info("Staff evaluation %s submitted (identity=%s)", evaluation.id, identity)
    return StaffEvaluationDocument.from_model(evaluation)


@router.get("", response_model=list[StaffEvaluationDocument])
async def list_evaluations(
    db: Annotated[AsyncSession, Depends(get_db)],
    branch: Annotated[str, Query()],
    date: Annotated[str, Query()],
) -> list[StaffEvaluationDocument]:
    """지점/날짜의 평가 목록을 최신순으로 조회합니다."""
    evaluations = await staff_evaluation_service.list_for(db, branch, date)
    return [StaffEvaluationDocument.from_model(e) for e in evaluations]


@router.get("/latest", response_model=StaffEvaluationDocument)
async def latest_evaluation(
    db: Annotated[AsyncSession, Depends(get_db)],
    emp_code: Annotated[str | None, Query()] = None,
    staff_name: Annotated[str | None, Query()] = None,
) -> StaffEvaluationDocument:
    """직원의 가장 최근 평가 — 사번 우선, 없으면 이름."""
    evaluation = await staff_evaluation_service.latest_for(db, emp_code=emp_code, staff_name=staff_name)
    return StaffEvaluationDocument.from_model(evaluation)


@router.get("/suggestions", response_model=list[StaffSuggestion])
async def suggest_staff(
    db: Annotated[AsyncSession, Depends(get_db)],
    prefix: Annotated[str, Query()] = "",
) -> list[StaffSuggestion]:
    """직원 이름 자동완성 후보를 반환합니다."""
    return await staff_evaluation_service.suggestions(db, prefix)


@router.get("/{evaluation_id}", response_model=StaffEvaluationDocument)
async def get_evaluation(
    evaluation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StaffEvaluationDocument:
    evaluation = await staff_evaluation_service.get(db, evaluation_id)
    return StaffEvaluationDocument.from_model(evaluation)


@router.get("/{evaluation_id}/pdf")
async def download_evaluation_pdf(
    evaluation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> StreamingResponse:
    """직원 평가 PDF를 다운로드합니다."""
    document = StaffEvaluationDocument.from_model(await staff_evaluation_service.get(db, evaluation_id))
    filename = report_filename(
        document.selection.branch, KIND_STAFF_EVAL, document.selection.date, suffix=document.emp_code
    )
    return StreamingResponse(
        BytesIO(report_service.staff_evaluation_pdf(document)),
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
