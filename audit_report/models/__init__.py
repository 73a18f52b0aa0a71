"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata.

Modules:
    unit_audit: 단위 감사 (Unit audits, collection "unitAudits")
    staff_evaluation: 직원 평가 (Staff evaluations, collection "staffEvaluations")
"""

from audit_report.models.unit_audit import UnitAudit
from audit_report.models.staff_evaluation import StaffEvaluation

__all__ = [
    "UnitAudit",
    "StaffEvaluation",
]
