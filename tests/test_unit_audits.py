"""단위 감사 API 테스트 — 점수 미리보기, 제출, 중복 방지, 조회, PDF.

Unit audit API tests — Score preview, submission, the one-audit-per-branch-
per-day rule, retrieval and PDF download.
"""

from uuid import uuid4

from httpx import AsyncClient

from tests.conftest import unit_audit_body

UNIT_AUDITS = "/api/v1/unit-audits"


class TestUnitAuditPreview:
    """실시간 점수 미리보기."""

    async def test_full_marks(self, client: AsyncClient, unit_body):
        res = await client.post(f"{UNIT_AUDITS}/score", json=unit_body)
        assert res.status_code == 200
        data = res.json()
        assert data["scoreOutOf100"] == 100
        assert data["scoreBreakdown"]["checklist"] == 78
        assert data["scoreBreakdown"]["totalBeforeClamp"] == 100

    async def test_incomplete_draft_still_scores(self, client: AsyncClient):
        res = await client.post(f"{UNIT_AUDITS}/score", json={})
        assert res.status_code == 200
        assert res.json()["scoreOutOf100"] == 0


class TestUnitAuditSubmit:
    """단위 감사 제출."""

    async def test_submit_success(self, client: AsyncClient, unit_body):
        res = await client.post(UNIT_AUDITS, json=unit_body)
        assert res.status_code == 201
        data = res.json()
        assert data["branch"] == "Koramangala"
        assert data["date"] == "01/06/2024"
        assert data["scoreOutOf100"] == 100
        assert data["observations"] == "No issues observed"
        assert data["actionPlan"] == "Follow-up audit in 7 days"
        assert data["foodSafety"]
        assert "id" in data and "timestamp" in data

    async def test_date_is_normalized_before_storing(self, client: AsyncClient):
        res = await client.post(UNIT_AUDITS, json=unit_audit_body(date="2024-06-01"))
        assert res.status_code == 201
        assert res.json()["date"] == "01/06/2024"

    async def test_other_remark_stores_manual_text(self, client: AsyncClient):
        body = unit_audit_body(observations="Other (manual)")
        body["observations"]["manual"] = "Minor spill, no issue overall"
        res = await client.post(UNIT_AUDITS, json=body)
        assert res.status_code == 201
        data = res.json()
        assert data["observations"] == "Minor spill, no issue overall"
        assert data["scoreBreakdown"]["observations"] == 11

    async def test_duplicate_branch_and_date_rejected(self, client: AsyncClient, unit_body):
        first = await client.post(UNIT_AUDITS, json=unit_body)
        assert first.status_code == 201

        second = await client.post(UNIT_AUDITS, json=unit_body)
        assert second.status_code == 409
        assert "Koramangala" in second.json()["detail"]
        assert "01/06/2024" in second.json()["detail"]

        listed = await client.get(UNIT_AUDITS, params={"branch": "Koramangala", "date": "01/06/2024"})
        assert len(listed.json()) == 1

    async def test_duplicate_detected_across_date_formats(self, client: AsyncClient):
        assert (await client.post(UNIT_AUDITS, json=unit_audit_body(date="1/6/2024"))).status_code == 201
        res = await client.post(UNIT_AUDITS, json=unit_audit_body(date="2024-06-01"))
        assert res.status_code == 409

    async def test_other_branch_same_day_allowed(self, client: AsyncClient):
        assert (await client.post(UNIT_AUDITS, json=unit_audit_body(branch="Koramangala"))).status_code == 201
        assert (await client.post(UNIT_AUDITS, json=unit_audit_body(branch="Whitefield"))).status_code == 201

    async def test_validation_errors_block_write(self, client: AsyncClient):
        body = unit_audit_body()
        body["kitchen"] = {}
        body["selection"]["auditor"] = ""
        res = await client.post(UNIT_AUDITS, json=body)
        assert res.status_code == 422
        detail = res.json()["detail"]
        assert "Auditor is required" in detail
        assert "Kitchen Cleanliness & Maintenance - 5 unanswered" in detail

        listed = await client.get(UNIT_AUDITS, params={"branch": "Koramangala", "date": "01/06/2024"})
        assert listed.json() == []


class TestUnitAuditRetrieval:
    """단위 감사 조회."""

    async def test_list_requires_branch_and_date(self, client: AsyncClient):
        res = await client.get(UNIT_AUDITS, params={"branch": "Koramangala", "date": ""})
        assert res.status_code == 400

    async def test_list_accepts_iso_date(self, client: AsyncClient, unit_body):
        await client.post(UNIT_AUDITS, json=unit_body)
        res = await client.get(UNIT_AUDITS, params={"branch": "Koramangala", "date": "2024-06-01"})
        assert res.status_code == 200
        assert [a["date"] for a in res.json()] == ["01/06/2024"]

    async def test_list_rejects_invalid_date(self, client: AsyncClient):
        for bad in ("garbage", "31/02/2024"):
            res = await client.get(UNIT_AUDITS, params={"branch": "Koramangala", "date": bad})
            assert res.status_code == 400
            assert res.json()["detail"] == f"Date is invalid: {bad}"

    async def test_get_by_id(self, client: AsyncClient, unit_body):
        created = (await client.post(UNIT_AUDITS, json=unit_body)).json()
        res = await client.get(f"{UNIT_AUDITS}/{created['id']}")
        assert res.status_code == 200
        assert res.json()["id"] == created["id"]

    async def test_get_missing(self, client: AsyncClient):
        res = await client.get(f"{UNIT_AUDITS}/{uuid4()}")
        assert res.status_code == 404

    async def test_pdf_download(self, client: AsyncClient, unit_body):
        created = (await client.post(UNIT_AUDITS, json=unit_body)).json()
        res = await client.get(f"{UNIT_AUDITS}/{created['id']}/pdf")
        assert res.status_code == 200
        assert res.headers["content-type"] == "application/pdf"
        assert res.content.startswith(b"%PDF")
        assert 'filename="Koramangala_Audit_01-06-2024.pdf"' in res.headers["content-disposition"]
