"""단위 감사 레포지토리 — unit_audits 조회/생성.

Unit Audit Repository — Queries over the unit_audits collection.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from audit_report.models.unit_audit import UnitAudit
from audit_report.repositories.base import BaseRepository


class UnitAuditRepository(BaseRepository[UnitAudit]):

    def __init__(self) -> None:
        super().__init__(UnitAudit)

    async def get_by_branch_date(self, db: AsyncSession, branch: str, date: str) -> Sequence[UnitAudit]:
        return await self.find(db, {"branch": branch, "date": date}, order_by="timestamp")

    async def get_latest(self, db: AsyncSession) -> UnitAudit | None:
        records = await self.find(db, order_by="timestamp", limit=1)
        return records[0] if records else None


unit_audit_repository: UnitAuditRepository = UnitAuditRepository()
