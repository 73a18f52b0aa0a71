"""익명 세션 JWT 토큰 유틸리티 모듈.

Anonymous session JWT utilities.
The service hands out anonymous identities so clients can tag their
sessions; no endpoint requires one and no record is scoped by it.

JWT Payload Structure:
    {
        "sub": "anon-<hex>",   # 익명 사용자 ID (Anonymous user identifier)
        "exp": 1234567890,     # 만료 시간 UNIX timestamp (Expiration)
        "type": "anonymous"    # 토큰 유형 (Token type discriminator)
    }
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from audit_report.config import settings

ANONYMOUS_TOKEN_TYPE: str = "anonymous"


def new_anonymous_uid() -> str:
    return f"anon-{secrets.token_hex(12)}"


def create_anonymous_token(uid: str) -> str:
    """익명 사용자용 JWT를 생성합니다.

    Args:
        uid: 익명 사용자 ID (Anonymous user identifier)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(days=settings.JWT_ANONYMOUS_TOKEN_EXPIRE_DAYS)
    payload: dict[str, Any] = {"sub": uid, "exp": expire, "type": ANONYMOUS_TOKEN_TYPE}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
