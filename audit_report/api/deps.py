"""FastAPI 의존성 주입 모듈 — 선택적 익명 식별자.

FastAPI dependency injection module — Optional anonymous identity.

Identity Flow:
    1. 클라이언트가 POST /api/v1/auth/anonymous 로 토큰을 발급받음
       (Client obtains an anonymous token)
    2. 이후 요청에 Authorization: Bearer <token> 헤더를 선택적으로 전송
       (Client may send it on later requests)
    3. get_optional_identity가 토큰을 디코딩 — 없거나 잘못되어도 실패하지 않음
       (Decoded when present; missing or invalid tokens yield None)

Core operations behave the same with or without an identity; it is only
attached to log lines.
"""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from audit_report.utils.jwt import ANONYMOUS_TOKEN_TYPE, decode_token
from audit_report.utils.logging_utils import get_logger

logger = get_logger("deps")

# auto_error=False: 헤더가 없어도 401을 발생시키지 않음 (No 401 when header is missing)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_optional_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Bearer 토큰에서 익명 사용자 ID를 추출합니다. 실패하면 None.

    Returns:
        str | None: 익명 사용자 ID (Anonymous uid, or None)
    """
    if credentials is None:
        return None
    try:
        payload: dict = decode_token(credentials.credentials)
    except jwt.InvalidTokenError as exc:
        logger.debug("Ignoring invalid identity token: %s", exc)
        return None
    if payload.get("type") != ANONYMOUS_TOKEN_TYPE:
        return None
    return payload.get("sub")


Identity = Annotated[str | None, Depends(get_optional_identity)]
