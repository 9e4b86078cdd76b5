# docflow/services/report_service.py

import io
import os
from datetime import date, datetime
from typing import Optional

import pdfkit
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger
from openpyxl import Workbook

from docflow.core.config import settings
from docflow.models.enums import ReportFormat
from docflow.schemas.report import DepartmentStat, ReportData

# -----------------------------
# Setup Jinja2 Environment
# -----------------------------
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
template_dir = os.path.join(BASE_DIR, "templates", "pdf")

report_env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(["html", "xml"]),
)

# -----------------------------
# PDF Configuration
# -----------------------------
pdf_options = {
    "page-size": "A4",
    "margin-top": "15mm",
    "margin-right": "15mm",
    "margin-bottom": "15mm",
    "margin-left": "15mm",
    "encoding": "UTF-8",
    "no-outline": None,
}

PDF_MEDIA_TYPE = "application/pdf"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DEPARTMENT_HEADERS = ["Department", "Files", "Requests", "Pending", "Completed", "Success Rate"]


def _format_date(value: Optional[date]) -> str:
    return value.strftime("%m/%d/%Y") if value else "N/A"


def summary_rows(report: ReportData) -> list[tuple[str, int]]:
    stats = report.data
    return [
        ("Total Files", stats.total_files),
        ("Total Requests", stats.total_requests),
        ("Pending Approvals", stats.pending_approvals),
        ("Completed This Month", stats.completed_this_month),
    ]


def department_row(stat: DepartmentStat) -> list:
    return [stat.name, stat.files, stat.requests, stat.pending, stat.completed, f"{stat.success_rate:.1f}%"]


def report_filename(report: ReportData, fmt: ReportFormat, today: Optional[date] = None) -> str:
    today = today or date.today()
    extension = "pdf" if fmt == ReportFormat.Pdf else "xlsx"
    return f"{report.type.lower()}-report-{today.isoformat()}.{extension}"


# -----------------------------
# PDF
# -----------------------------
def render_report_html(report: ReportData, generated: Optional[datetime] = None) -> str:
    template = report_env.get_template("report.html")
    return template.render(
        title=settings.REPORT_TITLE,
        report_type=report.type.upper(),
        date_from=_format_date(report.date_range.start),
        date_to=_format_date(report.date_range.end),
        generated=_format_date((generated or datetime.now()).date()),
        departments=report.departments,
        summary=summary_rows(report),
        department_headers=DEPARTMENT_HEADERS,
        department_rows=[department_row(s) for s in report.data.department_stats],
        statuses=report.data.status_distribution,
    )


def _pdf_configuration():
    # pdfkit searches PATH for wkhtmltopdf when no explicit binary is set
    if settings.WKHTMLTOPDF_PATH:
        return pdfkit.configuration(wkhtmltopdf=settings.WKHTMLTOPDF_PATH)
    return pdfkit.configuration()


def generate_pdf(report: ReportData) -> bytes:
    html = render_report_html(report)
    logger.info(f"Rendering {report.type} report as PDF")
    return pdfkit.from_string(html, False, options=pdf_options, configuration=_pdf_configuration())


# -----------------------------
# Spreadsheet
# -----------------------------
def generate_excel(report: ReportData, generated: Optional[datetime] = None) -> bytes:
    stats = report.data
    workbook = Workbook()

    summary = workbook.active
    summary.title = "Summary"
    summary.append([f"{settings.REPORT_TITLE} Report"])
    summary.append([])
    summary.append(["Report Type:", report.type.upper()])
    summary.append([
        "Date Range:",
        f"{_format_date(report.date_range.start)} - {_format_date(report.date_range.end)}",
    ])
    summary.append(["Generated:", _format_date((generated or datetime.now()).date())])
    summary.append([])
    summary.append(["SUMMARY STATISTICS"])
    for label, value in summary_rows(report):
        summary.append([f"{label}:", value])

    departments = workbook.create_sheet("Department Stats")
    departments.append(DEPARTMENT_HEADERS[:-1] + ["Success Rate (%)"])
    for stat in stats.department_stats:
        departments.append([stat.name, stat.files, stat.requests, stat.pending, stat.completed, stat.success_rate])

    statuses = workbook.create_sheet("Status Distribution")
    statuses.append(["Status", "Count"])
    for status in stats.status_distribution:
        statuses.append([status.name, status.value])

    trends = workbook.create_sheet("Monthly Trends")
    trends.append(["Month", "Files", "Requests"])
    for trend in stats.monthly_trend:
        trends.append([trend.month, trend.files, trend.requests])

    buffer = io.BytesIO()
    workbook.save(buffer)
    logger.info(f"Rendered {report.type} report as spreadsheet")
    return buffer.getvalue()


def generate_report(report: ReportData, fmt: ReportFormat) -> tuple[bytes, str]:
    """Returns (document bytes, media type)."""
    if fmt == ReportFormat.Pdf:
        return generate_pdf(report), PDF_MEDIA_TYPE
    return generate_excel(report), EXCEL_MEDIA_TYPE
