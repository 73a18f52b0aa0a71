"""보고서 라우터 — JSON 내보내기, 직원 평가 요약, 직원 이력.

Reports Router — JSON export of retrieved records, staff evaluation
summaries for a branch and date range, and per-employee history.
"""

from io import BytesIO
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.database import get_db
from audit_report.schemas.records import StaffEvaluationDocument, UnitAuditDocument
from audit_report.schemas.session import RetrieveFilters
from audit_report.services.aggregation_service import StaffSummary
from audit_report.services.report_service import (
    JSON_MEDIA_TYPE,
    KIND_AUDIT,
    KIND_STAFF_EVAL,
    KIND_STAFF_SUMMARY,
    PDF_MEDIA_TYPE,
    report_filename,
    report_service,
)
from audit_report.services.staff_evaluation_service import staff_evaluation_service
from audit_report.services.unit_audit_service import unit_audit_service

router: APIRouter = APIRouter()


@router.get("/export")
async def export_records(
    db: Annotated[AsyncSession, Depends(get_db)],
    kind: Annotated[Literal["unit", "staff"], Query()],
    branch: Annotated[str, Query()],
    date: Annotated[str, Query()],
) -> StreamingResponse:
    """지점/날짜로 조회한 레코드를 JSON 파일로 내려받습니다."""
    filters = RetrieveFilters(report_type=kind).with_branch(branch).with_date(date)
    if filters.report_type == "unit":
        audits = await unit_audit_service.list_for(db, branch, date)
        items = [UnitAuditDocument.from_model(a) for a in audits]
        report_kind = KIND_AUDIT
    else:
        evaluations = await staff_evaluation_service.list_for(db, branch, date)
        items = [StaffEvaluationDocument.from_model(e) for e in evaluations]
        report_kind = KIND_STAFF_EVAL

    filename = report_filename(filters.branch, report_kind, filters.date, extension="json")
    return StreamingResponse(
        BytesIO(report_service.export_json(items)),
        media_type=JSON_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/staff-summary", response_model=StaffSummary)
async def staff_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    branch: Annotated[str, Query()],
    date_from: Annotated[str | None, Query()] = None,
    date_to: Annotated[str | None, Query()] = None,
) -> StaffSummary:
    """지점의 직원 평가를 기간으로 걸러 직원별/항목별로 집계합니다."""
    return await staff_evaluation_service.branch_summary(db, branch, date_from, date_to)


@router.get("/staff-summary/pdf")
async def staff_summary_pdf(
    db: Annotated[AsyncSession, Depends(get_db)],
    branch: Annotated[str, Query()],
    date_from: Annotated[str | None, Query()] = None,
    date_to: Annotated[str | None, Query()] = None,
) -> StreamingResponse:
    """직원 평가 요약 PDF를 다운로드합니다."""
    summary = await staff_evaluation_service.branch_summary(db, branch, date_from, date_to)
    filename = report_filename(branch, KIND_STAFF_SUMMARY, summary.date_to or summary.date_from or None)
    return StreamingResponse(
        BytesIO(report_service.staff_summary_pdf(branch, summary)),
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/employee-history", response_model=StaffSummary)
async def employee_history(
    db: Annotated[AsyncSession, Depends(get_db)],
    emp_code: Annotated[str | None, Query()] = None,
    staff_name: Annotated[str | None, Query()] = None,
    date_from: Annotated[str | None, Query()] = None,
    date_to: Annotated[str | None, Query()] = None,
) -> StaffSummary:
    """사번 조회와 이름 조회를 합쳐 한 직원의 평가 이력을 집계합니다."""
    return await staff_evaluation_service.employee_history(
        db, emp_code=emp_code, staff_name=staff_name, date_from=date_from, date_to=date_to
    )
