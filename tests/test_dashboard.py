import pytest

from docflow.schemas.dashboard import (
    AdminDashboardStats,
    DepartmentDashboardStats,
    DirectorDashboardStats,
)
from docflow.views.dashboard import DashboardView


@pytest.mark.asyncio
async def test_admin_stats(runtime, login_as, backend):
    await login_as("admin")
    backend.on("GET", "/api/admin/dashboard", {"success": True, "stats": {
        "totalDepartments": 4,
        "totalActiveUsers": 20,
        "filesByDepartment": [{"departmentName": "Finance", "count": 7}],
        "recentActivities": [{"_id": "a-1", "action": "File uploaded", "user": {"fullName": "Ana Lee"}}],
    }})
    view = DashboardView(runtime)
    await view.mount()

    assert isinstance(view.stats, AdminDashboardStats)
    assert view.stats.total_departments == 4
    assert view.stats.files_by_department[0].count == 7
    assert view.stats.recent_activities[0].user_full_name == "Ana Lee"


@pytest.mark.asyncio
async def test_director_stats(runtime, login_as, backend):
    await login_as("director")
    backend.on("GET", "/api/admin/director/dashboard", {"success": True, "stats": {"pendingApprovals": 3}})
    view = DashboardView(runtime)
    await view.mount()

    assert isinstance(view.stats, DirectorDashboardStats)
    assert view.stats.pending_approvals == 3


@pytest.mark.asyncio
async def test_department_stats_use_own_department(runtime, login_as, backend):
    await login_as("department")
    backend.on("GET", "/api/admin/departments/d-1/stats", {"success": True, "stats": {"myFiles": 9}})
    view = DashboardView(runtime)
    await view.mount()

    assert isinstance(view.stats, DepartmentDashboardStats)
    assert view.stats.my_files == 9


@pytest.mark.asyncio
async def test_department_user_without_department_gets_empty_stats(runtime, login_as, backend):
    await login_as("department", department=None)
    calls_before = len(backend.calls)
    view = DashboardView(runtime)
    await view.mount()

    assert view.stats == DepartmentDashboardStats()
    assert len(backend.calls) == calls_before
