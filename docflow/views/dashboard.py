# docflow/views/dashboard.py

from typing import Optional, Union

from docflow.models.enums import Role
from docflow.schemas.dashboard import (
    AdminDashboardStats,
    DepartmentDashboardStats,
    DirectorDashboardStats,
)
from docflow.views.base import View

DashboardStats = Union[AdminDashboardStats, DirectorDashboardStats, DepartmentDashboardStats]


class DashboardView(View):
    """One dashboard route, three role-specific stat panels."""

    name = "dashboard"
    load_error = "Failed to load dashboard"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.stats: Optional[DashboardStats] = None

    async def load(self) -> None:
        role = self.session.role
        if role == Role.Admin:
            self.stats = await self.api.admin_dashboard()
        elif role == Role.Director:
            self.stats = await self.api.director_dashboard()
        else:
            user = self.session.user
            # a department user without a department has nothing to count
            if user is None or not user.department:
                self.stats = DepartmentDashboardStats()
                return
            self.stats = await self.api.department_dashboard(user.department)
