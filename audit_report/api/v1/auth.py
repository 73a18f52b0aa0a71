"""익명 인증 라우터 — 익명 세션 토큰 발급.

Anonymous Auth Router — Issues anonymous session tokens. Best effort only:
no endpoint requires a token.
"""

from fastapi import APIRouter

from audit_report.schemas.requests import AnonymousTokenResponse
from audit_report.utils.jwt import create_anonymous_token, new_anonymous_uid
from audit_report.utils.logging_utils import get_logger

router: APIRouter = APIRouter()
logger = get_logger("auth")


@router.post("/anonymous", response_model=AnonymousTokenResponse, status_code=201)
async def sign_in_anonymously() -> AnonymousTokenResponse:
    """익명 로그인 — 새 익명 ID와 토큰을 발급합니다."""
    uid = new_anonymous_uid()
    logger.info("Issued anonymous identity %s", uid)
    return AnonymousTokenResponse(access_token=create_anonymous_token(uid), uid=uid)
