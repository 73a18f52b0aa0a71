"""API v1 라우터 패키지 — 모든 엔드포인트 통합.

API v1 Router package — Aggregates every endpoint into a single router
for inclusion in the FastAPI application under ``/api/v1``.

Included routers:
    - auth: 익명 토큰 발급 (Anonymous sign-in)
    - health: 저장소 연결 확인 (Store connectivity test)
    - catalog: 고정 카탈로그 (Branches, checklist, presets, parameters)
    - selection: 지점/유형 선택 (Branch and report type selection)
    - unit_audits: 단위 감사 (Unit audits)
    - staff_evaluations: 직원 평가 (Staff evaluations)
    - reports: 내보내기 및 집계 (Exports and aggregates)
"""

from fastapi import APIRouter

from audit_report.api.v1.auth import router as auth_router
from audit_report.api.v1.catalog import router as catalog_router
from audit_report.api.v1.health import router as health_router
from audit_report.api.v1.reports import router as reports_router
from audit_report.api.v1.selection import router as selection_router
from audit_report.api.v1.staff_evaluations import router as staff_evaluations_router
from audit_report.api.v1.unit_audits import router as unit_audits_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])
api_router.include_router(selection_router, prefix="/selection", tags=["Selection"])

# 레코드: 제출 및 조회 (Records: submission and retrieval)
api_router.include_router(unit_audits_router, prefix="/unit-audits", tags=["Unit Audits"])
api_router.include_router(staff_evaluations_router, prefix="/staff-evaluations", tags=["Staff Evaluations"])

# 보고서: 내보내기, 요약, 이력 (Reports: export, summary, history)
api_router.include_router(reports_router, prefix="/reports", tags=["Reports"])
