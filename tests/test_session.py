"""세션 상태 유닛 테스트.

Session state unit tests — pure transitions on the selection, the drafts
and the retrieval filters.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from audit_report.catalog import OTHER_MANUAL, STAFF_PARAMETERS
from audit_report.schemas.session import (
    RetrieveFilters,
    StaffEvaluationDraft,
    UnitAuditDraft,
    choose_selection,
)
from audit_report.services.score_engine import RemarkKind


class TestSelection:
    """선택 스냅샷."""

    def test_city_and_date_filled(self):
        selection = choose_selection("Kochi", "staff", "Kumar Kannaiyan", now=datetime(2024, 6, 1, 10))
        assert selection.city == "Kochi"
        assert selection.date == "01/06/2024"
        assert selection.type == "staff"

    def test_unknown_branch_has_empty_city(self):
        assert choose_selection("Nowhere", "unit", "K").city == ""

    def test_selection_is_frozen(self):
        selection = choose_selection("Kochi", "unit", "K")
        with pytest.raises(ValidationError):
            selection.branch = "Manyata"


class TestUnitAuditDraft:
    """단위 감사 초안 전이."""

    def test_with_answer_returns_new_draft(self):
        draft = UnitAuditDraft()
        updated = draft.with_answer("kitchen", "Overall kitchen cleanliness maintained", "Yes")
        assert draft.kitchen == {}
        assert updated.kitchen == {"Overall kitchen cleanliness maintained": "Yes"}

    def test_with_answer_unknown_section(self):
        with pytest.raises(KeyError):
            UnitAuditDraft().with_answer("garden", "x", "Yes")

    def test_preset_change_clears_manual_text(self):
        draft = (
            UnitAuditDraft()
            .with_remark_preset("observations", OTHER_MANUAL)
            .with_remark_manual("observations", "broken tile")
        )
        assert draft.observations.choice().kind is RemarkKind.OTHER
        assert draft.observations.manual == "broken tile"

        switched = draft.with_remark_preset("observations", "No issues observed")
        assert switched.observations.manual == ""
        assert switched.observations.choice().kind is RemarkKind.PRESET

    def test_accepts_camel_case_body(self):
        draft = UnitAuditDraft.model_validate({
            "foodSafety": {"Fridge temperature maintained (<=5°C)": "No"},
            "actionPlan": {"preset": "Escalate to branch manager"},
        })
        assert draft.answers()["food_safety"] == {"Fridge temperature maintained (<=5°C)": "No"}
        assert draft.action_plan.preset == "Escalate to branch manager"


class TestStaffEvaluationDraft:
    """직원 평가 초안 전이."""

    def test_rating_and_remark(self):
        draft = (
            StaffEvaluationDraft()
            .with_rating(STAFF_PARAMETERS[0], "Good")
            .with_rating_remark(STAFF_PARAMETERS[0], "always early")
        )
        assert draft.ratings == {
            STAFF_PARAMETERS[0]: "Good",
            f"{STAFF_PARAMETERS[0]}_remarks": "always early",
        }

    def test_cleared_keeps_selection(self):
        selection = choose_selection("Kochi", "staff", "K")
        draft = (
            StaffEvaluationDraft(selection=selection)
            .with_staff_details("Ravi", "E01", "Cook")
            .with_rating(STAFF_PARAMETERS[0], "Poor")
        )
        cleared = draft.cleared()
        assert cleared.selection == selection
        assert cleared.staff_name == ""
        assert cleared.ratings == {}


class TestRetrieveFilters:
    """조회 필터."""

    def test_dates_are_normalized(self):
        filters = RetrieveFilters().with_branch("Kochi").with_date("2024-06-01")
        assert filters.branch == "Kochi"
        assert filters.date == "01/06/2024"

    def test_range(self):
        filters = RetrieveFilters(report_type="staff").with_range("2024-03-01", None)
        assert filters.date_from == "01/03/2024"
        assert filters.date_to == ""
