"""집계 서비스 — 직원 평가 레코드의 직원별/항목별 통계.

Aggregation Service — Groups staff evaluation documents by employee and by
rating parameter, filters them by calendar-date range and removes duplicate
records before aggregating.

Input records are mappings in the stored document shape::

    {
        "id": "...",
        "staffName": "Ravi", "empCode": "E01", "designation": "Cook",
        "ratings": {"Work Discipline": "Good", "Work Discipline_remarks": "..."},
        "totalMarks": "80", "grade": "B", "scoreOutOf100": 80,
        "selection": {"branch": "...", "city": "...", "auditor": "...", "date": "DD/MM/YYYY"},
        "createdAt": datetime,
    }

All functions are pure.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

from audit_report.catalog import RATING_LEVELS, REMARKS_SUFFIX
from audit_report.utils.dates import parse_ddmmyyyy, to_calendar_date

Record = Mapping[str, Any]


class EmployeeAggregate(BaseModel):
    """직원별 집계 결과 (Per-employee aggregate)."""

    key: str
    emp_code: str
    staff_name: str
    designation: str
    count: int
    scored_count: int
    avg_score: float | None
    label: str
    latest_branch: str
    latest_city: str
    latest_date: str


class ParameterAggregate(BaseModel):
    """항목별 평가 분포 (Per-parameter rating distribution)."""

    parameter: str
    counts: dict[str, int]
    total: int


class StaffSummary(BaseModel):
    """직원 평가 요약 묶음 — 보고서 렌더러 입력."""

    date_from: str
    date_to: str
    record_count: int
    employees: list[EmployeeAggregate]
    parameters: list[ParameterAggregate]


def label_for_average(avg: float | None) -> str:
    if avg is None:
        return "-"
    if avg >= 90:
        return "Excellent"
    if avg >= 75:
        return "Good"
    if avg >= 60:
        return "Average"
    return "Poor"


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def employee_key(record: Record) -> str:
    """그룹 키 — empCode, 없으면 staffName (대소문자 무시)."""
    code = _text(record.get("empCode"))
    if code:
        return code.lower()
    return _text(record.get("staffName")).lower()


def record_score(record: Record) -> float | None:
    """레코드의 숫자 점수. scoreOutOf100 우선, 없으면 totalMarks, 그 외 None."""
    for field in ("scoreOutOf100", "totalMarks"):
        value = record.get(field)
        if value is None or isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return float(str(value).strip())
        except ValueError:
            continue
    return None


def _selection(record: Record) -> Mapping[str, Any]:
    return record.get("selection") or {}


def _created_key(record: Record) -> float:
    created = record.get("createdAt")
    if isinstance(created, datetime):
        return created.timestamp()
    if isinstance(created, (int, float)) and not isinstance(created, bool):
        return float(created)
    return float("-inf")


def dedupe_records(records: Iterable[Record]) -> list[Record]:
    """레코드 id 기준 중복 제거 — 첫 번째 항목 유지, 멱등.

    Records without an id are kept as-is.
    """
    seen: set[str] = set()
    unique: list[Record] = []
    for record in records:
        record_id = record.get("id")
        if record_id is not None:
            key = str(record_id)
            if key in seen:
                continue
            seen.add(key)
        unique.append(record)
    return unique


def in_date_range(record_date: date | None, date_from: date | None, date_to: date | None) -> bool:
    """닫힌 구간 [from, to] 포함 여부. 경계가 없으면 열린 구간."""
    if date_from is None and date_to is None:
        return True
    if record_date is None:
        return False
    if date_from is not None and record_date < date_from:
        return False
    if date_to is not None and record_date > date_to:
        return False
    return True


def _range_bound(name: str, value: Any) -> date | None:
    if not value:
        return None
    bound = to_calendar_date(value)
    if bound is None:
        raise ValueError(f"{name} is not a valid date: {value}")
    return bound


def filter_by_range(records: Iterable[Record], date_from: Any = None, date_to: Any = None) -> list[Record]:
    """선택 날짜가 범위에 드는 레코드만 반환합니다.

    Bounds may be any supported date representation; an empty bound is open.

    Raises:
        ValueError: 경계를 날짜로 해석할 수 없음 (A bound is not a date)
    """
    start = _range_bound("date_from", date_from)
    end = _range_bound("date_to", date_to)
    return [
        r for r in records
        if in_date_range(parse_ddmmyyyy(_text(_selection(r).get("date"))), start, end)
    ]


def aggregate_by_employee(records: Iterable[Record]) -> list[EmployeeAggregate]:
    """직원별 집계 — 첫 등장 순서대로 반환합니다."""
    groups: dict[str, list[Record]] = {}
    for record in records:
        groups.setdefault(employee_key(record), []).append(record)

    result: list[EmployeeAggregate] = []
    for key, group in groups.items():
        scores = [s for s in (record_score(r) for r in group) if s is not None]
        avg = sum(scores) / len(scores) if scores else None

        # 최신 레코드 — createdAt 최대, 동률이면 먼저 나온 레코드
        latest = group[0]
        for record in group[1:]:
            if _created_key(record) > _created_key(latest):
                latest = record
        selection = _selection(latest)

        result.append(EmployeeAggregate(
            key=key,
            emp_code=_text(latest.get("empCode")),
            staff_name=_text(latest.get("staffName")),
            designation=_text(latest.get("designation")),
            count=len(group),
            scored_count=len(scores),
            avg_score=avg,
            label=label_for_average(avg),
            latest_branch=_text(selection.get("branch")),
            latest_city=_text(selection.get("city")),
            latest_date=_text(selection.get("date")),
        ))
    return result


def aggregate_by_parameter(records: Iterable[Record]) -> list[ParameterAggregate]:
    """항목별 평가 등급 분포 — remarks 키는 제외."""
    counts: dict[str, dict[str, int]] = {}
    for record in records:
        ratings = record.get("ratings") or {}
        for parameter, value in ratings.items():
            if parameter.endswith(REMARKS_SUFFIX):
                continue
            bucket = counts.setdefault(parameter, {level: 0 for level in RATING_LEVELS})
            if value in bucket:
                bucket[value] += 1

    return [
        ParameterAggregate(parameter=parameter, counts=bucket, total=sum(bucket.values()))
        for parameter, bucket in counts.items()
    ]


def summarize_staff(records: Iterable[Record], date_from: Any = None, date_to: Any = None) -> StaffSummary:
    """중복 제거 → 기간 필터 → 직원별/항목별 집계. 잘못된 경계는 ValueError."""
    selected = filter_by_range(dedupe_records(records), date_from, date_to)
    start = _range_bound("date_from", date_from)
    end = _range_bound("date_to", date_to)
    return StaffSummary(
        date_from=start.strftime("%d/%m/%Y") if start else "",
        date_to=end.strftime("%d/%m/%Y") if end else "",
        record_count=len(selected),
        employees=aggregate_by_employee(selected),
        parameters=aggregate_by_parameter(selected),
    )
