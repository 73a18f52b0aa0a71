"""선택 라우터 — 지점/보고서 유형 선택.

Selection Router — Starts a report session. The returned snapshot carries
the branch city, the auditor and today's date; a unit audit selection is
refused when that branch already has an audit for today.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.api.deps import Identity
from audit_report.catalog import BRANCH_CITY
from audit_report.config import settings
from audit_report.database import get_db, store_errors
from audit_report.schemas.requests import SelectionRequest
from audit_report.schemas.session import SelectionState, choose_selection
from audit_report.services.uniqueness_guard import ensure_unit_audit_available
from audit_report.utils.exceptions import BadRequestError
from audit_report.utils.logging_utils import get_logger

router: APIRouter = APIRouter()
logger = get_logger("selection")


@router.post("", response_model=SelectionState)
async def select_branch(
    data: SelectionRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Identity,
) -> SelectionState:
    """지점과 유형을 선택합니다. 단위 감사는 오늘 날짜 중복을 확인합니다."""
    if data.branch not in BRANCH_CITY:
        raise BadRequestError(f"Unknown branch: {data.branch}")

    selection = choose_selection(data.branch, data.type, data.auditor or settings.DEFAULT_AUDITOR)
    if data.type == "unit":
        async with store_errors(db, "Could not verify existing audits"):
            await ensure_unit_audit_available(db, selection.branch, selection.date)

    logger.info("Selection %s/%s on %s (identity=%s)", selection.branch, selection.type, selection.date, identity)
    return selection
