from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.schemas.common import CamelModel


class DepartmentCount(CamelModel):
    department_name: str
    count: int = 0


class RecentActivity(CamelModel):
    id: str
    action: str
    user_full_name: Optional[str] = None
    created_at: Optional[datetime] = None
    type: str = "info"

    @model_validator(mode="before")
    @classmethod
    def flatten_user(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            data = {**data, "userFullName": data["user"].get("fullName")}
        return data


class AdminDashboardStats(CamelModel):
    total_departments: int = 0
    total_active_users: int = 0
    total_files: int = 0
    recent_activities: list[RecentActivity] = []
    files_by_department: list[DepartmentCount] = []
    requests_by_department: list[DepartmentCount] = []


class DirectorDashboardStats(CamelModel):
    pending_approvals: int = 0
    files_reviewed: int = 0
    requests_approved: int = 0
    urgent_items: int = 0


class DepartmentDashboardStats(CamelModel):
    my_files: int = 0
    shared_files: int = 0
    pending_requests: int = 0
    completed: int = 0
