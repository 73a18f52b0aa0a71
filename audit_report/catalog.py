"""고정 카탈로그 — 지점, 체크리스트 항목, 비고 프리셋, 평가 항목.

Fixed catalog shared by forms, scoring and validation.
Checklist items, remark presets and rating parameters are fixed per
deployment; records store their labels verbatim, so changing a label here
changes the keys of future records only.
"""

# 지점 → 도시 매핑 (Branch → city)
BRANCH_CITY: dict[str, str] = {
    "HSR Layout": "Bangalore",
    "Koramangala": "Bangalore",
    "Whitefield": "Bangalore",
    "Bannerghatta Road": "Bangalore",
    "Electronic City": "Bangalore",
    "Manyata": "Bangalore",
    "Kochi": "Kochi",
    "Coimbatore": "Coimbatore",
}

REPORT_TYPES: tuple[str, ...] = ("unit", "staff")

# === 단위 감사 체크리스트 (Unit audit checklist) ===

KITCHEN_ITEMS: tuple[str, ...] = (
    "Overall kitchen cleanliness maintained",
    "Floors, walls, and ceilings clean and dry",
    "Cooking range and equipment properly cleaned",
    "Exhaust system functioning and cleaned",
    "Waste segregation & disposal followed",
)

HYGIENE_ITEMS: tuple[str, ...] = (
    "Staff wearing clean uniform, cap, gloves, mask",
    "Personal hygiene maintained (nails, hair, hand wash)",
    "Hand wash & sanitizer available and used",
)

FOOD_SAFETY_ITEMS: tuple[str, ...] = (
    "Bain Marie temperature maintained (>=60°C)",
    "Fridge temperature maintained (<=5°C)",
    "Freezer temperature maintained (<=-18°C)",
    "Raw and cooked food stored separately",
    "Expiry date & labelling followed",
)

# section key → (title, items); order is the report order
CHECKLIST_SECTIONS: dict[str, tuple[str, tuple[str, ...]]] = {
    "kitchen": ("Kitchen Cleanliness & Maintenance", KITCHEN_ITEMS),
    "hygiene": ("Personal Hygiene", HYGIENE_ITEMS),
    "food_safety": ("Food Safety & Storage", FOOD_SAFETY_ITEMS),
}

ANSWER_YES: str = "Yes"
ANSWER_NO: str = "No"
ANSWERS: tuple[str, ...] = (ANSWER_YES, ANSWER_NO)

# === 비고 프리셋 (Remark presets) ===

SELECT_PLACEHOLDER: str = "-- Select --"
OTHER_MANUAL: str = "Other (manual)"

OBSERVATION_PRESETS: tuple[str, ...] = (
    "No issues observed",
    "Minor cleanliness issues (surface/sweep)",
    "Food held outside safe temperature range",
    "Cross-contamination risk observed",
    "Staff hygiene non-compliant",
    "Equipment malfunction (e.g., oven/fridge)",
    "Pest activity or droppings noted",
    "Expired or damaged items found",
    "Insufficient labeling / traceability",
    OTHER_MANUAL,
)

MAINTENANCE_PRESETS: tuple[str, ...] = (
    "No maintenance required",
    "Immediate cleaning required",
    "Schedule deep-cleaning",
    "Repair or service equipment",
    "Replace expired/damaged stock",
    "Retrain staff on hygiene & PPE",
    "Improve waste segregation & disposal",
    "Adjust/monitor temperature controls",
    "Improve labeling & storage procedures",
    "Implement daily cleaning checklist",
    OTHER_MANUAL,
)

ACTION_PLAN_PRESETS: tuple[str, ...] = (
    "Correct on spot & coach staff",
    "Repair within 24-48 hours",
    "Discard affected items and document",
    "Schedule vendor/service visit",
    "Staff re-training scheduled",
    "Implement new SOP/checklist",
    "Follow-up audit in 7 days",
    "Escalate to branch manager",
    "Document corrective action and monitor",
    OTHER_MANUAL,
)

# "이상 없음" 프리셋 — presets that earn the remark bonus
OBSERVATION_NO_ISSUE: frozenset[str] = frozenset({"no issues observed"})
MAINTENANCE_NO_ISSUE: frozenset[str] = frozenset({"no maintenance required", "no issues observed"})

# remark key → (label, presets)
REMARK_FIELDS: dict[str, tuple[str, tuple[str, ...]]] = {
    "observations": ("Observations", OBSERVATION_PRESETS),
    "maintenance": ("Maintenance / Suggestions", MAINTENANCE_PRESETS),
    "action_plan": ("Action Plan / Corrective Measures", ACTION_PLAN_PRESETS),
}

# === 직원 평가 (Staff evaluation) ===

STAFF_PARAMETERS: tuple[str, ...] = (
    "Attendance / Punctuality",
    "Work Discipline",
    "Food Taste / Quality",
    "Hygiene & Grooming",
    "Teamwork / Attitude",
)

RATING_LEVELS: tuple[str, ...] = ("Excellent", "Good", "Average", "Poor")

REMARKS_SUFFIX: str = "_remarks"


def city_for_branch(branch: str) -> str:
    """지점의 도시를 반환합니다. 알 수 없는 지점이면 빈 문자열."""
    return BRANCH_CITY.get(branch, "")


def catalog_payload() -> dict:
    """카탈로그를 API 응답 형태로 직렬화합니다."""
    return {
        "branches": [{"branch": b, "city": c} for b, c in BRANCH_CITY.items()],
        "report_types": list(REPORT_TYPES),
        "checklist": [
            {"key": key, "title": title, "items": list(items)}
            for key, (title, items) in CHECKLIST_SECTIONS.items()
        ],
        "answers": list(ANSWERS),
        "remarks": [
            {"key": key, "label": label, "options": [SELECT_PLACEHOLDER, *presets]}
            for key, (label, presets) in REMARK_FIELDS.items()
        ],
        "staff_parameters": list(STAFF_PARAMETERS),
        "rating_levels": list(RATING_LEVELS),
    }
