"""점수 엔진 — 단위 감사 및 직원 평가 점수 계산.

Score Engine — Pure scoring policies for unit audits and staff evaluations.
No I/O and no exceptions: missing inputs fall back to 0 / None / "" so a
client can always render a numeric state.

Unit audit (ceiling 100):
    checklist = 6 × (items answered "Yes")          # 13 items → max 78
    observations, maintenance ∈ {+11, 0, -11}
    score = clamp(checklist + observations + maintenance, 0, 100)

Staff evaluation (ceiling 100):
    score = round-half-up(mean(value(rating) for answered parameters))
    value: Excellent=100, Good=80, Average=60, Poor=40
    grade: >=90 A, >=75 B, >=60 C, else D
"""

import enum
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from audit_report.catalog import (
    ANSWER_YES,
    CHECKLIST_SECTIONS,
    MAINTENANCE_NO_ISSUE,
    OBSERVATION_NO_ISSUE,
    SELECT_PLACEHOLDER,
    STAFF_PARAMETERS,
)

POINTS_PER_CHECK: int = 6
REMARK_POINTS: int = 11
SCORE_FLOOR: int = 0
SCORE_CEILING: int = 100

RATING_VALUES: dict[str, int] = {
    "Excellent": 100,
    "Good": 80,
    "Average": 60,
    "Poor": 40,
}

NO_ISSUE_PHRASE: str = "no issue"


class RemarkKind(str, enum.Enum):
    """비고 선택 유형 (Remark selection variant)."""

    UNSET = "unset"
    PRESET = "preset"
    OTHER = "other"


@dataclass(frozen=True)
class RemarkChoice:
    """프리셋/수동 입력 쌍의 태그드 표현.

    Tagged representation of a (preset, manual text) remark pair.
    ``preset`` is only meaningful for ``PRESET``; ``manual`` for ``OTHER``
    and for ``UNSET`` when the user typed text without choosing an option.
    """

    kind: RemarkKind
    preset: str = ""
    manual: str = ""

    @classmethod
    def from_input(cls, preset: str | None, manual: str | None = None) -> "RemarkChoice":
        """폼 입력값을 태그드 선택으로 변환합니다."""
        manual_text = (manual or "").strip()
        preset_text = (preset or "").strip()
        if not preset_text or preset_text == SELECT_PLACEHOLDER:
            return cls(RemarkKind.UNSET, manual=manual_text)
        if "other" in preset_text.lower():
            return cls(RemarkKind.OTHER, preset=preset_text, manual=manual_text)
        return cls(RemarkKind.PRESET, preset=preset_text)


def resolve_remark_text(choice: RemarkChoice) -> str:
    """저장할 비고 텍스트를 결정합니다. 내용이 없으면 ``"-"``."""
    if choice.kind is RemarkKind.PRESET:
        return choice.preset
    return choice.manual or "-"


def remark_points(choice: RemarkChoice, no_issue_presets: Iterable[str]) -> int:
    """비고 하나의 점수: +11 (이상 없음), 0 (미선택), -11 (그 외)."""
    if choice.kind is RemarkKind.UNSET:
        return 0
    if choice.kind is RemarkKind.OTHER:
        if NO_ISSUE_PHRASE in choice.manual.lower():
            return REMARK_POINTS
        return -REMARK_POINTS
    if choice.preset.lower() in {p.lower() for p in no_issue_presets}:
        return REMARK_POINTS
    return -REMARK_POINTS


def observation_points(choice: RemarkChoice) -> int:
    return remark_points(choice, OBSERVATION_NO_ISSUE)


def maintenance_points(choice: RemarkChoice) -> int:
    return remark_points(choice, MAINTENANCE_NO_ISSUE)


def checklist_points(answers: Mapping[str, Mapping[str, str] | None]) -> int:
    """체크리스트 점수 — 세 섹션 전체의 "Yes" 개수 × 6.

    Args:
        answers: 섹션 키 → {항목 라벨: "Yes"|"No"} (Section key → item answers)
    """
    total = 0
    for key, (_title, items) in CHECKLIST_SECTIONS.items():
        section = answers.get(key) or {}
        for label in items:
            if str(section.get(label, "")).strip().lower() == ANSWER_YES.lower():
                total += POINTS_PER_CHECK
    return total


def max_checklist_points() -> int:
    return POINTS_PER_CHECK * sum(len(items) for _title, items in CHECKLIST_SECTIONS.values())


@dataclass(frozen=True)
class UnitScore:
    """단위 감사 점수와 그 분해 (Unit audit score with its breakdown)."""

    checklist: int
    observations: int
    maintenance: int
    total_before_clamp: int
    max_checklist: int
    score_out_of_100: int

    def breakdown(self) -> dict[str, int]:
        return {
            "checklist": self.checklist,
            "observations": self.observations,
            "maintenance": self.maintenance,
            "totalBeforeClamp": self.total_before_clamp,
            "maxChecklist": self.max_checklist,
        }


def clamp_score(raw: int) -> int:
    return max(SCORE_FLOOR, min(SCORE_CEILING, raw))


def score_unit_audit(
    answers: Mapping[str, Mapping[str, str] | None],
    observations: RemarkChoice,
    maintenance: RemarkChoice,
) -> UnitScore:
    """단위 감사 점수를 계산합니다.

    Compute the unit audit score. The action plan remark is not scored.

    Args:
        answers: 섹션 키(kitchen/hygiene/food_safety) → 항목 응답
        observations: 관찰 사항 선택 (Observations remark)
        maintenance: 유지보수 선택 (Maintenance remark)

    Returns:
        UnitScore: 최종 점수(0~100)와 분해 값 (Clamped score and breakdown)
    """
    checklist = checklist_points(answers)
    obs = observation_points(observations)
    maint = maintenance_points(maintenance)
    raw = checklist + obs + maint
    return UnitScore(
        checklist=checklist,
        observations=obs,
        maintenance=maint,
        total_before_clamp=raw,
        max_checklist=max_checklist_points(),
        score_out_of_100=clamp_score(raw),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_staff_ratings(
    ratings: Mapping[str, str] | None,
    parameters: Iterable[str] = STAFF_PARAMETERS,
) -> int | None:
    """직원 평가 점수 — 응답된 항목 값의 평균을 반올림.

    Returns None when no parameter carries a known rating; submissions are
    rejected by validation before that can be stored.
    """
    ratings = ratings or {}
    values = [RATING_VALUES[ratings[p]] for p in parameters if ratings.get(p) in RATING_VALUES]
    if not values:
        return None
    return _round_half_up(sum(values) / len(values))


def grade_for_score(score: int | float) -> str:
    if score >= 90:
        return "A"
    if score >= 75:
        return "B"
    if score >= 60:
        return "C"
    return "D"


def staff_score_summary(ratings: Mapping[str, str] | None) -> tuple[int | None, str, str]:
    """실시간 미리보기용 (점수, totalMarks 문자열, 등급). 응답이 없으면 빈 문자열."""
    score = score_staff_ratings(ratings)
    if score is None:
        return None, "", ""
    return score, str(score), grade_for_score(score)
