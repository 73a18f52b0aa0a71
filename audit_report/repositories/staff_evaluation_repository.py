"""직원 평가 레포지토리 — staff_evaluations 조회/생성.

Staff Evaluation Repository — Queries over the staff_evaluations collection.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.models.staff_evaluation import StaffEvaluation
from audit_report.repositories.base import BaseRepository


class StaffEvaluationRepository(BaseRepository[StaffEvaluation]):

    def __init__(self) -> None:
        super().__init__(StaffEvaluation)

    async def get_by_branch_date(self, db: AsyncSession, branch: str, date: str) -> Sequence[StaffEvaluation]:
        return await self.find(
            db, {"selection.branch": branch, "selection.date": date}, order_by="createdAt"
        )

    async def get_by_branch(self, db: AsyncSession, branch: str) -> Sequence[StaffEvaluation]:
        return await self.find(db, {"selection.branch": branch}, order_by="createdAt")

    async def get_by_emp_code(self, db: AsyncSession, emp_code: str) -> Sequence[StaffEvaluation]:
        return await self.find(db, {"empCode": emp_code}, order_by="createdAt")

    async def get_by_staff_name(self, db: AsyncSession, staff_name: str) -> Sequence[StaffEvaluation]:
        return await self.find(db, {"staffName": staff_name}, order_by="createdAt")

    async def get_latest_for(
        self, db: AsyncSession, emp_code: str | None = None, staff_name: str | None = None
    ) -> StaffEvaluation | None:
        """사번(우선) 또는 이름으로 가장 최근 평가를 조회합니다."""
        if emp_code:
            filters = {"empCode": emp_code}
        elif staff_name:
            filters = {"staffName": staff_name}
        else:
            return None
        records = await self.find(db, filters, order_by="createdAt", limit=1)
        return records[0] if records else None

    async def get_recent(self, db: AsyncSession, limit: int) -> Sequence[StaffEvaluation]:
        return await self.find(db, order_by="createdAt", limit=limit)


staff_evaluation_repository: StaffEvaluationRepository = StaffEvaluationRepository()
