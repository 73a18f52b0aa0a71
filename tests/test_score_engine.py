"""점수 엔진 유닛 테스트.

Score engine unit tests — checklist points, remark bonuses, clamping,
staff rating averages and grades.
"""

from audit_report.catalog import SELECT_PLACEHOLDER, STAFF_PARAMETERS
from audit_report.services.score_engine import (
    RemarkChoice,
    RemarkKind,
    checklist_points,
    clamp_score,
    grade_for_score,
    maintenance_points,
    max_checklist_points,
    observation_points,
    resolve_remark_text,
    score_staff_ratings,
    score_unit_audit,
    staff_score_summary,
)
from tests.conftest import all_answers

NO_OBS = RemarkChoice.from_input("No issues observed")
NO_MAINT = RemarkChoice.from_input("No maintenance required")
UNSET = RemarkChoice.from_input(SELECT_PLACEHOLDER)


class TestRemarkChoice:
    """프리셋/수동 입력 → 태그드 선택 변환."""

    def test_placeholder_is_unset(self):
        assert RemarkChoice.from_input(SELECT_PLACEHOLDER).kind is RemarkKind.UNSET
        assert RemarkChoice.from_input("").kind is RemarkKind.UNSET
        assert RemarkChoice.from_input(None).kind is RemarkKind.UNSET

    def test_other_detected_case_insensitively(self):
        choice = RemarkChoice.from_input("Other (manual)", "  leaking tap ")
        assert choice.kind is RemarkKind.OTHER
        assert choice.manual == "leaking tap"

    def test_preset(self):
        choice = RemarkChoice.from_input("Schedule deep-cleaning", "ignored")
        assert choice.kind is RemarkKind.PRESET
        assert choice.manual == ""

    def test_resolve_text(self):
        assert resolve_remark_text(RemarkChoice.from_input("Schedule deep-cleaning")) == "Schedule deep-cleaning"
        assert resolve_remark_text(RemarkChoice.from_input("Other (manual)", " fix fan ")) == "fix fan"
        assert resolve_remark_text(UNSET) == "-"
        assert resolve_remark_text(RemarkChoice.from_input(SELECT_PLACEHOLDER, "typed")) == "typed"


class TestRemarkPoints:
    """비고 점수: +11 / 0 / -11."""

    def test_no_issue_presets_earn_bonus(self):
        assert observation_points(NO_OBS) == 11
        assert maintenance_points(NO_MAINT) == 11
        assert maintenance_points(RemarkChoice.from_input("No issues observed")) == 11

    def test_unset_scores_zero(self):
        assert observation_points(UNSET) == 0
        assert maintenance_points(UNSET) == 0

    def test_other_preset_penalised(self):
        assert observation_points(RemarkChoice.from_input("Pest activity or droppings noted")) == -11

    def test_other_manual_with_no_issue_phrase(self):
        assert observation_points(RemarkChoice.from_input("Other (manual)", "All fine, NO ISSUE today")) == 11

    def test_other_manual_without_phrase(self):
        assert observation_points(RemarkChoice.from_input("Other (manual)", "drain blocked")) == -11


class TestUnitScore:
    """단위 감사 점수."""

    def test_max_checklist_is_78(self):
        assert max_checklist_points() == 78

    def test_all_yes_with_no_issue_remarks_is_100(self):
        score = score_unit_audit(all_answers("Yes"), NO_OBS, NO_MAINT)
        assert score.checklist == 78
        assert score.total_before_clamp == 100
        assert score.score_out_of_100 == 100

    def test_all_no_with_bad_remarks_clamps_to_zero(self):
        bad = RemarkChoice.from_input("Staff hygiene non-compliant")
        score = score_unit_audit(all_answers("No"), bad, bad)
        assert score.total_before_clamp == -22
        assert score.score_out_of_100 == 0

    def test_partial_answers(self):
        answers = {"kitchen": {"Overall kitchen cleanliness maintained": "Yes"}, "hygiene": None}
        assert checklist_points(answers) == 6
        assert score_unit_audit(answers, UNSET, UNSET).score_out_of_100 == 6

    def test_unknown_labels_ignored(self):
        assert checklist_points({"kitchen": {"Not a real item": "Yes"}}) == 0

    def test_breakdown_keys(self):
        breakdown = score_unit_audit(all_answers("Yes"), NO_OBS, UNSET).breakdown()
        assert breakdown == {
            "checklist": 78,
            "observations": 11,
            "maintenance": 0,
            "totalBeforeClamp": 89,
            "maxChecklist": 78,
        }

    def test_clamp_bounds(self):
        assert clamp_score(-5) == 0
        assert clamp_score(150) == 100
        assert clamp_score(42) == 42


class TestStaffScore:
    """직원 평가 점수/등급."""

    def test_mixed_ratings_example(self):
        """Excellent, Excellent, Good, Average, Poor → 76 → B."""
        ratings = dict(zip(STAFF_PARAMETERS, ["Excellent", "Excellent", "Good", "Average", "Poor"]))
        assert score_staff_ratings(ratings) == 76
        assert grade_for_score(76) == "B"

    def test_average_of_answered_parameters_only(self):
        ratings = {STAFF_PARAMETERS[0]: "Excellent", STAFF_PARAMETERS[1]: "Average"}
        assert score_staff_ratings(ratings) == 80

    def test_rounds_to_nearest(self):
        # 260 / 3 = 86.67
        ratings = dict(zip(STAFF_PARAMETERS, ["Excellent", "Good", "Good"]))
        assert score_staff_ratings(ratings) == 87
        # 280 / 3 = 93.33
        ratings = dict(zip(STAFF_PARAMETERS, ["Excellent", "Excellent", "Good"]))
        assert score_staff_ratings(ratings) == 93

    def test_no_answers_returns_none(self):
        assert score_staff_ratings({}) is None
        assert score_staff_ratings(None) is None
        assert score_staff_ratings({STAFF_PARAMETERS[0]: "Maybe"}) is None

    def test_remark_keys_ignored(self):
        ratings = {STAFF_PARAMETERS[0]: "Poor", f"{STAFF_PARAMETERS[0]}_remarks": "late twice"}
        assert score_staff_ratings(ratings) == 40

    def test_grade_thresholds(self):
        assert grade_for_score(90) == "A"
        assert grade_for_score(89) == "B"
        assert grade_for_score(75) == "B"
        assert grade_for_score(74) == "C"
        assert grade_for_score(60) == "C"
        assert grade_for_score(59) == "D"

    def test_summary_fallback(self):
        assert staff_score_summary({}) == (None, "", "")
        assert staff_score_summary({STAFF_PARAMETERS[0]: "Excellent"}) == (100, "100", "A")
