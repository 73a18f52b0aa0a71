"""날짜 정규화 유틸리티 모듈.

Date normalization utilities.
Every record stores its calendar date as a ``DD/MM/YYYY`` string, which is
also the equality key for duplicate checks and retrieval. ``normalize_date``
turns the heterogeneous inputs a client may send into that canonical form.

Rules:
    - ``D/M/YYYY`` style strings are zero-padded and re-emitted as written
      (no timezone reinterpretation).
    - Other inputs are parsed; timezone-aware values are converted to the
      local zone before the calendar fields are read, never to UTC.
    - Unparseable input is returned unchanged so validation can reject it.
"""

import re
from datetime import date, datetime

_DMY_SLASH = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DMY_DASH = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")

# 로케일 표기 — common locale renderings tried after ISO parsing
_LOCALE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%a %b %d %Y",
    "%A, %B %d, %Y",
    "%d.%m.%Y",
)


def _format(day: int, month: int, year: int) -> str:
    return f"{day:02d}/{month:02d}/{year:04d}"


def _local_calendar_date(value: datetime | date) -> date:
    """aware datetime은 로컬 시간대로 변환한 뒤 날짜만 취합니다."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def _parse_text(text: str) -> date | None:
    match = _DMY_DASH.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return _local_calendar_date(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    for fmt in _LOCALE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_date(value: object) -> str:
    """날짜 표현을 ``DD/MM/YYYY`` 문자열로 정규화합니다.

    Normalize any date-like value to ``DD/MM/YYYY``.

    Args:
        value: ``DD/MM/YYYY``/``D/M/YYYY`` 문자열, ISO 문자열, 로케일 날짜 문자열,
               또는 ``date``/``datetime`` 값 (Any supported date representation)

    Returns:
        str: 정규화된 문자열. 빈 입력이면 ``""``, 해석 불가하면 입력 그대로
             (Canonical string; ``""`` for empty input; the input itself when
             it cannot be parsed)
    """
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        d = _local_calendar_date(value)
        return _format(d.day, d.month, d.year)

    text = str(value).strip()
    if not text:
        return ""

    match = _DMY_SLASH.match(text)
    if match:
        day, month, year = match.groups()
        return f"{day.zfill(2)}/{month.zfill(2)}/{year}"

    parsed = _parse_text(text)
    if parsed is None:
        return str(value)
    return _format(parsed.day, parsed.month, parsed.year)


def parse_ddmmyyyy(text: str | None) -> date | None:
    """``DD/MM/YYYY`` 문자열을 ``date``로 변환합니다. 실패 시 None."""
    if not text:
        return None
    match = _DMY_SLASH.match(text.strip())
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_calendar_date(value: object) -> date | None:
    """임의의 날짜 표현을 로컬 달력 날짜로 변환합니다 (범위 비교용)."""
    return parse_ddmmyyyy(normalize_date(value))


def is_valid_ddmmyyyy(text: str | None) -> bool:
    return parse_ddmmyyyy(text) is not None


def today_ddmmyyyy(now: datetime | None = None) -> str:
    """오늘 날짜(로컬)를 ``DD/MM/YYYY``로 반환합니다."""
    return normalize_date(now or datetime.now().astimezone())


def safe_filename_part(text: str | None, fallback: str) -> str:
    """파일명 구성 요소 — 공백은 밑줄, 경로 구분자는 하이픈으로 치환합니다."""
    cleaned = (text or "").strip()
    if not cleaned:
        return fallback
    return re.sub(r"\s+", "_", cleaned).replace("/", "-").replace("\\", "-")
