"""보고서 렌더러 — 감사/평가/요약 PDF와 JSON 내보내기.

Report Renderer — Turns stored records and aggregate bundles into
downloadable artifacts: A4 PDF reports (reportlab) and JSON exports.
Rendering reads only the records it is given; no store access.

Filenames follow ``{branch}_{ReportKind}_{date}.{ext}`` with whitespace
replaced by ``_`` and path separators by ``-``.
"""

import json
from io import BytesIO
from xml.sax.saxutils import escape

from pydantic import BaseModel
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from audit_report.catalog import CHECKLIST_SECTIONS, RATING_LEVELS, REMARK_FIELDS, REMARKS_SUFFIX, STAFF_PARAMETERS
from audit_report.config import settings
from audit_report.schemas.records import StaffEvaluationDocument, UnitAuditDocument
from audit_report.services.aggregation_service import StaffSummary
from audit_report.utils.dates import safe_filename_part

PDF_MEDIA_TYPE: str = "application/pdf"
JSON_MEDIA_TYPE: str = "application/json"

# 보고서 종류 — Report kinds used in filenames
KIND_AUDIT: str = "Audit"
KIND_STAFF_EVAL: str = "StaffEval"
KIND_STAFF_SUMMARY: str = "StaffSummary"

_HEADER_BLUE = colors.HexColor("#2980b9")


def report_filename(
    branch: str | None,
    kind: str,
    date: str | None,
    suffix: str | None = None,
    extension: str = "pdf",
) -> str:
    """다운로드 파일명을 생성합니다.

    Examples:
        report_filename("HSR Layout", "Audit", "01/06/2024") -> "HSR_Layout_Audit_01-06-2024.pdf"
        report_filename("Kochi", "StaffEval", "01/06/2024", "E01") -> "Kochi_StaffEval_01-06-2024_E01.pdf"
    """
    parts = [safe_filename_part(branch, "Branch"), kind, safe_filename_part(date, "date")]
    if suffix is not None:
        parts.append(safe_filename_part(suffix, "unknown"))
    return f"{'_'.join(parts)}.{extension}"


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Title"], fontSize=14, spaceAfter=4),
        "subtitle": ParagraphStyle("ReportSubtitle", parent=base["Normal"], alignment=1, fontSize=10),
        "label": ParagraphStyle("ReportLabel", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=10),
        "body": ParagraphStyle("ReportBody", parent=base["Normal"], fontSize=9, leading=12),
        "footer": ParagraphStyle("ReportFooter", parent=base["Normal"], alignment=1, fontSize=9),
    }


def _p(text: object, style: ParagraphStyle) -> Paragraph:
    # Paragraph는 마크업을 해석하므로 "<=5°C" 같은 라벨은 이스케이프 필요
    return Paragraph(escape(str(text) if text not in (None, "") else "-"), style)


def _grid(rows: list[list], col_widths: list[float]) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    return table


def _info_table(rows: list[tuple[str, str]], styles: dict[str, ParagraphStyle]) -> Table:
    table = Table([[_p(left, styles["body"]), _p(right, styles["body"])] for left, right in rows],
                  colWidths=[95 * mm, 85 * mm])
    table.setStyle(TableStyle([("ALIGN", (1, 0), (1, -1), "RIGHT")]))
    return table


def _build(story: list) -> bytes:
    buffer = BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=14 * mm,
        bottomMargin=14 * mm,
    )
    document.build(story)
    return buffer.getvalue()


class ReportService:
    """보고서 렌더러.

    Report renderer producing PDF bytes and JSON export bytes.
    """

    def unit_audit_pdf(self, audit: UnitAuditDocument) -> bytes:
        """단위 감사 PDF — 헤더, 섹션별 체크리스트 표, 비고 블록."""
        styles = _styles()
        story: list = [
            _p(f"{settings.REPORT_ORGANIZATION} - F&B UNIT AUDIT REPORT", styles["title"]),
            _p("Audited by F&B Manager", styles["subtitle"]),
            _p(audit.auditor or settings.DEFAULT_AUDITOR, styles["subtitle"]),
            Spacer(1, 6 * mm),
            _info_table([
                (f"Branch: {audit.branch or '-'}", f"Date: {audit.date or '-'}"),
                (f"City: {audit.city or '-'}", f"Score: {audit.score_out_of_100} / 100"),
            ], styles),
            Spacer(1, 4 * mm),
        ]

        answers = {"kitchen": audit.kitchen, "hygiene": audit.hygiene, "food_safety": audit.food_safety}
        for key, (title, items) in CHECKLIST_SECTIONS.items():
            section = answers.get(key) or {}
            rows: list[list] = [[title, "Status"]]
            rows.extend([_p(label, styles["body"]), section.get(label, "-")] for label in items)
            story.extend([_grid(rows, [130 * mm, 40 * mm]), Spacer(1, 4 * mm)])

        remarks = {
            "observations": audit.observations,
            "maintenance": audit.maintenance,
            "action_plan": audit.action_plan,
        }
        for key, (label, _presets) in REMARK_FIELDS.items():
            story.extend([
                _p(f"{label}:", styles["label"]),
                _p(remarks[key], styles["body"]),
                Spacer(1, 3 * mm),
            ])

        story.extend([
            Spacer(1, 6 * mm),
            _p(f"Audit report as on {audit.date} - {audit.branch} (by {audit.auditor})", styles["footer"]),
        ])
        return _build(story)

    def staff_evaluation_pdf(self, evaluation: StaffEvaluationDocument) -> bytes:
        """직원 평가 PDF — 직원 정보, 항목별 등급/비고 표."""
        styles = _styles()
        selection = evaluation.selection
        story: list = [
            _p(f"{settings.REPORT_ORGANIZATION} - STAFF EVALUATION REPORT", styles["title"]),
            _p("Audited by F&B Manager", styles["subtitle"]),
            _p(selection.auditor or settings.DEFAULT_AUDITOR, styles["subtitle"]),
            Spacer(1, 6 * mm),
            _info_table([
                (f"Branch: {selection.branch or '-'}", f"Date: {selection.date or '-'}"),
                (f"City: {selection.city or '-'}", ""),
                (f"Staff Name: {evaluation.staff_name}", ""),
                (f"Emp Code: {evaluation.emp_code}", f"Total Marks: {evaluation.total_marks}"),
                (f"Designation: {evaluation.designation or '-'}", f"Grade: {evaluation.grade}"),
            ], styles),
            Spacer(1, 4 * mm),
        ]

        rows: list[list] = [["Parameter", "Rating", "Remarks"]]
        for parameter in STAFF_PARAMETERS:
            rows.append([
                _p(parameter, styles["body"]),
                evaluation.ratings.get(parameter, "-"),
                _p(evaluation.ratings.get(f"{parameter}{REMARKS_SUFFIX}", "-"), styles["body"]),
            ])
        story.extend([
            _grid(rows, [80 * mm, 30 * mm, 70 * mm]),
            Spacer(1, 6 * mm),
            _p(f"Staff evaluation as on {selection.date} - {selection.branch}", styles["footer"]),
        ])
        return _build(story)

    def staff_summary_pdf(self, branch: str, summary: StaffSummary) -> bytes:
        """직원 평가 요약 PDF — 직원별 평균/등급, 항목별 분포."""
        styles = _styles()
        period = f"{summary.date_from or 'start'} to {summary.date_to or 'today'}"
        story: list = [
            _p(f"{settings.REPORT_ORGANIZATION} - STAFF EVALUATION SUMMARY", styles["title"]),
            _p(f"Branch: {branch or '-'}  |  Period: {period}  |  Records: {summary.record_count}",
               styles["subtitle"]),
            Spacer(1, 6 * mm),
        ]

        employee_rows: list[list] = [["Emp Code", "Staff Name", "Evaluations", "Average", "Label", "Latest Branch"]]
        for employee in summary.employees:
            average = f"{employee.avg_score:.1f}" if employee.avg_score is not None else "-"
            employee_rows.append([
                employee.emp_code or "-",
                _p(employee.staff_name, styles["body"]),
                employee.count,
                average,
                employee.label,
                _p(employee.latest_branch, styles["body"]),
            ])
        story.extend([
            _grid(employee_rows, [24 * mm, 46 * mm, 22 * mm, 20 * mm, 22 * mm, 46 * mm]),
            Spacer(1, 6 * mm),
        ])

        parameter_rows: list[list] = [["Parameter", *RATING_LEVELS, "Total"]]
        for aggregate in summary.parameters:
            parameter_rows.append([
                _p(aggregate.parameter, styles["body"]),
                *(aggregate.counts.get(level, 0) for level in RATING_LEVELS),
                aggregate.total,
            ])
        story.append(_grid(parameter_rows, [60 * mm, 22 * mm, 22 * mm, 22 * mm, 22 * mm, 22 * mm]))
        return _build(story)

    def export_json(self, items: list[BaseModel]) -> bytes:
        """조회된 레코드를 들여쓰기된 JSON 배열로 직렬화합니다 (camelCase)."""
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


report_service: ReportService = ReportService()
