from datetime import date
from typing import Optional
from pydantic import Field

from docflow.schemas.common import CamelModel


class DateRange(CamelModel):
    # "from" is a keyword, hence the explicit aliases
    start: Optional[date] = Field(default=None, alias="from")
    end: Optional[date] = Field(default=None, alias="to")


class DepartmentStat(CamelModel):
    name: str
    files: int = 0
    requests: int = 0
    pending: int = 0
    completed: int = 0

    @property
    def success_rate(self) -> float:
        total = self.files + self.requests
        if total == 0:
            return 0.0
        return round(self.completed / total * 100, 1)


class StatusCount(CamelModel):
    name: str
    value: int = 0


class MonthlyTrend(CamelModel):
    month: str
    files: int = 0
    requests: int = 0


class ReportStats(CamelModel):
    total_files: int = 0
    total_requests: int = 0
    pending_approvals: int = 0
    completed_this_month: int = 0
    department_stats: list[DepartmentStat] = []
    status_distribution: list[StatusCount] = []
    monthly_trend: list[MonthlyTrend] = []


class ReportData(CamelModel):
    type: str
    date_range: DateRange = DateRange()
    departments: list[str] = []
    data: ReportStats = ReportStats()

