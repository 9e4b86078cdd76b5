# docflow/views/reports.py

from datetime import date
from typing import Optional, Sequence

from docflow.core.roles import PAGE_ROLES
from docflow.models.enums import ReportFormat
from docflow.schemas.department import Department
from docflow.schemas.report import DateRange, ReportData, ReportStats
from docflow.services import report_service
from docflow.views.base import View


class ReportsView(View):
    name = "reports"
    required_roles = PAGE_ROLES["/dashboard/reports"]
    load_error = "Failed to load report data"

    def __init__(
        self,
        runtime,
        report_type: str = "overview",
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        departments: Sequence[str] = (),
    ):
        super().__init__(runtime)
        self.report_type = report_type
        self.date_range = DateRange(start=date_from, end=date_to)
        self.selected_departments = list(departments)
        self.departments: list[Department] = []
        self.stats = ReportStats()
        self.exporting = False

    def _params(self) -> dict:
        return {
            "type": self.report_type,
            "dateFrom": self.date_range.start.isoformat() if self.date_range.start else None,
            "dateTo": self.date_range.end.isoformat() if self.date_range.end else None,
            "departments": ",".join(self.selected_departments) or None,
        }

    async def load(self) -> None:
        self.departments, self.stats = await self.scope.gather(
            self.api.list_departments(),
            self.api.report_data(self._params()),
        )

    @property
    def report(self) -> ReportData:
        names = {d.id: d.name for d in self.departments}
        return ReportData(
            type=self.report_type,
            date_range=self.date_range,
            departments=[names.get(d, d) for d in self.selected_departments],
            data=self.stats,
        )

    def export(self, fmt: ReportFormat | str = ReportFormat.Pdf) -> Optional[tuple[str, bytes, str]]:
        """Render the loaded data; returns (filename, content, media type)."""
        try:
            fmt = ReportFormat(fmt)
        except ValueError:
            self.notifier.error("Export failed", f"Unsupported report format: {fmt}")
            return None

        report = self.report
        self.exporting = True
        try:
            content, media_type = report_service.generate_report(report, fmt)
        except OSError as exc:
            self.notifier.error("Export failed", str(exc) or f"Failed to generate {fmt.value} report")
            return None
        finally:
            self.exporting = False

        filename = report_service.report_filename(report, fmt)
        self.notifier.success("Report exported", f"{filename} is ready")
        return filename, content, media_type
