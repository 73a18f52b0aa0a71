"""API 요청/응답 보조 스키마.

Auxiliary request/response schemas for the selection, scoring and
anonymous sign-in endpoints. Submission bodies are the session drafts
in ``audit_report.schemas.session``.
"""

from typing import Literal

from pydantic import BaseModel, Field


class SelectionRequest(BaseModel):
    """선택 화면 요청 — 지점과 보고서 유형.

    Attributes:
        branch: 지점명 (Branch name, must be in the catalog)
        type: "unit" | "staff"
        auditor: 감사자 (Optional; defaults to the configured auditor)
    """

    branch: str
    type: Literal["unit", "staff"]
    auditor: str | None = None


class StaffScoreRequest(BaseModel):
    """직원 평가 실시간 점수 요청 (Ratings only)."""

    ratings: dict[str, str] = Field(default_factory=dict)


class AnonymousTokenResponse(BaseModel):
    """익명 토큰 응답 스키마."""

    access_token: str
    token_type: str = "bearer"
    uid: str
