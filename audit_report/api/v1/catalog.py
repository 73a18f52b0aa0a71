"""카탈로그 라우터 — 지점, 체크리스트 항목, 비고 프리셋, 평가 항목.

Catalog Router — Fixed form catalog for clients.
"""

from fastapi import APIRouter

from audit_report.catalog import catalog_payload

router: APIRouter = APIRouter()


@router.get("")
async def get_catalog() -> dict:
    """폼 구성에 필요한 고정 카탈로그를 반환합니다."""
    return catalog_payload()
