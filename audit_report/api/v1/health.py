"""저장소 연결 확인 라우터.

Store Health Router — Quick connectivity test that reads the newest unit
audit (limit 1).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.database import get_db
from audit_report.schemas.records import StoreHealth
from audit_report.services.unit_audit_service import unit_audit_service

router: APIRouter = APIRouter()


@router.get("/store", response_model=StoreHealth)
async def store_health(db: Annotated[AsyncSession, Depends(get_db)]) -> StoreHealth:
    """가장 최근 감사 1건을 조회해 저장소 연결을 확인합니다."""
    latest = await unit_audit_service.latest(db)
    if latest is None:
        return StoreHealth(message="Quick test: connected, no unit audits yet")
    return StoreHealth(message=f"Quick test: latest unit audit {latest.branch} on {latest.date}")
