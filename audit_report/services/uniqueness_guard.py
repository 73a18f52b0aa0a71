"""중복 방지 — 지점+날짜, 사번+날짜 조합당 레코드 하나.

Uniqueness Guard — At most one unit audit per (branch, date) and one staff
evaluation per (empCode, selection.date).

The check is a plain equality query issued immediately before the insert in
the same request. Two concurrent submissions can both pass it; no unique
index backs the guard.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.repositories.base import BaseRepository
from audit_report.repositories.staff_evaluation_repository import staff_evaluation_repository
from audit_report.repositories.unit_audit_repository import unit_audit_repository
from audit_report.utils.dates import normalize_date
from audit_report.utils.exceptions import ConflictError
from audit_report.utils.logging_utils import get_logger

logger = get_logger("uniqueness_guard")


async def exists_conflict(db: AsyncSession, repository: BaseRepository, key: dict[str, Any]) -> bool:
    """키에 일치하는 레코드가 이미 있으면 True.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        repository: 대상 컬렉션 레포지토리 (Collection to query)
        key: {문서 필드명: 값} (Equality key, dates already normalized)
    """
    return await repository.exists(db, key)


def unit_audit_key(branch: str, date: Any) -> dict[str, str]:
    return {"branch": branch, "date": normalize_date(date)}


def normalize_emp_code(emp_code: str | None) -> str:
    """사번은 대문자로 저장/비교합니다 (Employee codes are stored and matched upper-cased)."""
    return (emp_code or "").strip().upper()


def staff_evaluation_key(emp_code: str, date: Any) -> dict[str, str]:
    return {"empCode": normalize_emp_code(emp_code), "selection.date": normalize_date(date)}


async def ensure_unit_audit_available(db: AsyncSession, branch: str, date: Any) -> None:
    """해당 지점/날짜의 단위 감사가 있으면 ConflictError."""
    key = unit_audit_key(branch, date)
    if await exists_conflict(db, unit_audit_repository, key):
        logger.info("Unit audit conflict for %s on %s", key["branch"], key["date"])
        raise ConflictError(
            f'A Unit Audit for branch "{key["branch"]}" on {key["date"]} already exists. '
            "Only one audit per branch per day is allowed."
        )


async def ensure_staff_evaluation_available(db: AsyncSession, emp_code: str, date: Any) -> None:
    """해당 사번/날짜의 직원 평가가 있으면 ConflictError."""
    key = staff_evaluation_key(emp_code, date)
    if await exists_conflict(db, staff_evaluation_repository, key):
        logger.info("Staff evaluation conflict for %s on %s", key["empCode"], key["selection.date"])
        raise ConflictError(
            f'A Staff Evaluation for Emp Code "{key["empCode"]}" on {key["selection.date"]} '
            "already exists. Only one evaluation per staff per day is allowed."
        )
