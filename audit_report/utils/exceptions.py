"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error taxonomy of
the audit service, so services can raise without choosing status codes.

Usage:
    from audit_report.utils.exceptions import ConflictError, StoreError
    raise ConflictError('A Unit Audit for branch "HSR Layout" on 01/06/2024 already exists.')
    raise StoreError("Error saving audit", exc)
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 레코드를 찾을 수 없을 때 사용.

    Args:
        detail: 오류 메시지 (Error message, default: "Record not found")
    """

    def __init__(self, detail: str = "Record not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 같은 키(지점+날짜, 사번+날짜)의 레코드가 이미 있을 때 사용.

    409 Conflict exception raised by the uniqueness guard. The message names
    the key and the date so the user can find the existing record.

    Args:
        detail: 오류 메시지 (Error message)
    """

    def __init__(self, detail: str = "Record already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 조회 파라미터 등.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class SubmissionValidationError(HTTPException):
    """422 검증 실패 — 제출 전 로컬 검증에서 발견된 오류 목록.

    422 Unprocessable Entity carrying every human-readable validation message.
    Raised before any store access; nothing is written.

    Args:
        messages: 사용자에게 보여줄 오류 메시지 목록 (Validation messages)
    """

    def __init__(self, messages: list[str]) -> None:
        self.messages: list[str] = list(messages)
        super().__init__(status_code=422, detail=self.messages)


class StoreError(HTTPException):
    """503 저장소 오류 — 네트워크/권한 등 저장소 실패.

    503 Service Unavailable for record store failures. Not retried; the
    underlying diagnostic is included verbatim so the user can report it.

    Args:
        action: 실패한 작업 설명 (What was being attempted)
        cause: 원인 예외 (Underlying exception, optional)
    """

    def __init__(self, action: str, cause: Exception | None = None) -> None:
        detail = action if cause is None else f"{action}: {cause}"
        self.cause: Exception | None = cause
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
