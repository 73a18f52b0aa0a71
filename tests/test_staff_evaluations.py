"""직원 평가 API 테스트 — 점수 미리보기, 제출, 중복 방지, 조회, 자동완성, PDF.

Staff evaluation API tests — Score preview, submission, the one-evaluation-
per-employee-per-day rule, retrieval, latest lookup, suggestions and PDF.
"""

from httpx import AsyncClient

from audit_report.catalog import STAFF_PARAMETERS
from tests.conftest import staff_evaluation_body

STAFF = "/api/v1/staff-evaluations"
MIXED = dict(zip(STAFF_PARAMETERS, ["Excellent", "Excellent", "Good", "Average", "Poor"]))


class TestStaffPreview:
    """실시간 점수 미리보기."""

    async def test_mixed_ratings(self, client: AsyncClient):
        res = await client.post(f"{STAFF}/score", json={"ratings": MIXED})
        assert res.status_code == 200
        assert res.json() == {"scoreOutOf100": 76, "totalMarks": "76", "grade": "B"}

    async def test_no_ratings_fallback(self, client: AsyncClient):
        res = await client.post(f"{STAFF}/score", json={"ratings": {}})
        assert res.json() == {"scoreOutOf100": None, "totalMarks": "", "grade": ""}


class TestStaffSubmit:
    """직원 평가 제출."""

    async def test_submit_success(self, client: AsyncClient):
        body = staff_evaluation_body(ratings={**MIXED, f"{STAFF_PARAMETERS[4]}_remarks": "  needs coaching "})
        res = await client.post(STAFF, json=body)
        assert res.status_code == 201
        data = res.json()
        assert data["scoreOutOf100"] == 76
        assert data["totalMarks"] == "76"
        assert data["grade"] == "B"
        assert data["selection"]["date"] == "15/03/2024"
        assert data["ratings"][f"{STAFF_PARAMETERS[4]}_remarks"] == "needs coaching"

    async def test_zero_ratings_rejected(self, client: AsyncClient):
        res = await client.post(STAFF, json=staff_evaluation_body(ratings={}))
        assert res.status_code == 422
        assert res.json()["detail"][0].startswith("Please rate:")

    async def test_same_emp_code_same_day_rejected(self, client: AsyncClient):
        assert (await client.post(STAFF, json=staff_evaluation_body())).status_code == 201
        res = await client.post(STAFF, json=staff_evaluation_body(staff_name="Someone Else", date="2024-03-15"))
        assert res.status_code == 409
        assert "E01" in res.json()["detail"]

    async def test_emp_code_case_folded(self, client: AsyncClient):
        created = await client.post(STAFF, json=staff_evaluation_body(emp_code=" e01 "))
        assert created.status_code == 201
        assert created.json()["empCode"] == "E01"

        res = await client.post(STAFF, json=staff_evaluation_body(emp_code="E01"))
        assert res.status_code == 409

    async def test_same_emp_code_other_day_allowed(self, client: AsyncClient):
        assert (await client.post(STAFF, json=staff_evaluation_body(date="15/03/2024"))).status_code == 201
        assert (await client.post(STAFF, json=staff_evaluation_body(date="16/03/2024"))).status_code == 201


class TestStaffRetrieval:
    """직원 평가 조회."""

    async def test_list_by_branch_and_date(self, client: AsyncClient):
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E01"))
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E02", staff_name="Anita"))
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E03", branch="Kochi"))

        res = await client.get(STAFF, params={"branch": "HSR Layout", "date": "15/03/2024"})
        assert res.status_code == 200
        # createdAt 내림차순
        assert [e["empCode"] for e in res.json()] == ["E02", "E01"]

    async def test_latest_by_emp_code(self, client: AsyncClient):
        await client.post(STAFF, json=staff_evaluation_body(date="15/03/2024", rating="Poor"))
        await client.post(STAFF, json=staff_evaluation_body(date="16/03/2024", rating="Excellent"))
        res = await client.get(f"{STAFF}/latest", params={"emp_code": "E01"})
        assert res.status_code == 200
        assert res.json()["selection"]["date"] == "16/03/2024"

    async def test_latest_by_name(self, client: AsyncClient):
        await client.post(STAFF, json=staff_evaluation_body())
        res = await client.get(f"{STAFF}/latest", params={"staff_name": "Ravi Kumar"})
        assert res.status_code == 200
        assert res.json()["empCode"] == "E01"

    async def test_list_rejects_invalid_date(self, client: AsyncClient):
        res = await client.get(STAFF, params={"branch": "HSR Layout", "date": "30/02/2024"})
        assert res.status_code == 400
        assert res.json()["detail"] == "Date is invalid: 30/02/2024"

    async def test_latest_by_lowercase_emp_code(self, client: AsyncClient):
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E01"))
        res = await client.get(f"{STAFF}/latest", params={"emp_code": "e01"})
        assert res.status_code == 200
        assert res.json()["empCode"] == "E01"

    async def test_latest_not_found(self, client: AsyncClient):
        res = await client.get(f"{STAFF}/latest", params={"emp_code": "NOPE"})
        assert res.status_code == 404

    async def test_latest_requires_identity(self, client: AsyncClient):
        res = await client.get(f"{STAFF}/latest")
        assert res.status_code == 400

    async def test_suggestions_prefix_case_insensitive(self, client: AsyncClient):
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E01", staff_name="Ravi Kumar", date="15/03/2024"))
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E01", staff_name="Ravi Kumar", date="16/03/2024"))
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E07", staff_name="Ravindra", date="15/03/2024"))
        await client.post(STAFF, json=staff_evaluation_body(emp_code="E09", staff_name="Anita", date="15/03/2024"))

        res = await client.get(f"{STAFF}/suggestions", params={"prefix": "rav"})
        assert res.status_code == 200
        suggestions = res.json()
        assert sorted(s["empCode"] for s in suggestions) == ["E01", "E07"]
        ravi = next(s for s in suggestions if s["empCode"] == "E01")
        assert ravi["lastRecord"]["selection"]["date"] == "16/03/2024"

    async def test_suggestions_empty_prefix(self, client: AsyncClient):
        res = await client.get(f"{STAFF}/suggestions", params={"prefix": "  "})
        assert res.json() == []

    async def test_pdf_download(self, client: AsyncClient):
        created = (await client.post(STAFF, json=staff_evaluation_body())).json()
        res = await client.get(f"{STAFF}/{created['id']}/pdf")
        assert res.status_code == 200
        assert res.content.startswith(b"%PDF")
        assert 'filename="HSR_Layout_StaffEval_15-03-2024_E01.pdf"' in res.headers["content-disposition"]
