# docflow/api/endpoints/reports.py

from fastapi import APIRouter, Depends, HTTPException, Response
from loguru import logger

from docflow.api.deps import CookieSession, require_report_access
from docflow.models.enums import ReportFormat
from docflow.schemas.report import ReportData
from docflow.services.report_service import generate_report, report_filename

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.post("/export")
async def export_report(
    report: ReportData,
    format: ReportFormat = ReportFormat.Pdf,
    session: CookieSession = Depends(require_report_access),
):
    try:
        content, media_type = generate_report(report, format)
    except OSError as e:
        # wkhtmltopdf missing or crashed
        logger.error(f"Report export failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate report")

    filename = report_filename(report, format)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
