import pytest

from docflow.views.departments import AssignDirectorView, DepartmentsView
from docflow.views.files import FileInboxView, MyFilesView, SharedFilesView
from docflow.views.inbox import RequestInboxView
from docflow.views.notifications import NotificationsView
from docflow.views.reports import ReportsView
from docflow.views.requests import MyRequestsView, RequestCreateView
from docflow.views.settings import AppSettingsView
from docflow.views.users import UserManagementView
from docflow.schemas.department import Department

ADMIN_VIEWS = [
    UserManagementView,
    DepartmentsView,
    AppSettingsView,
]

SIGNED_IN_VIEWS = [
    FileInboxView,
    MyFilesView,
    SharedFilesView,
    RequestCreateView,
    MyRequestsView,
    NotificationsView,
]


@pytest.mark.asyncio
@pytest.mark.parametrize("view_class", ADMIN_VIEWS + SIGNED_IN_VIEWS)
async def test_signed_out_user_is_sent_to_login_without_fetching(runtime, backend, view_class):
    view = view_class(runtime)

    assert await view.mount() is False
    assert runtime.navigator.location == "/login"
    assert backend.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("role, landing", [
    ("director", "/dashboard/files/inbox"),
    ("department", "/dashboard/files/myfiles"),
])
@pytest.mark.parametrize("view_class", ADMIN_VIEWS)
async def test_wrong_role_is_downgraded_without_fetching(runtime, backend, login_as, view_class, role, landing):
    await login_as(role)
    calls_before = len(backend.calls)

    view = view_class(runtime)
    assert await view.mount() is False

    assert runtime.navigator.location == landing
    assert len(backend.calls) == calls_before
    assert view.mounted is False


@pytest.mark.asyncio
async def test_assign_director_is_admin_only(runtime, backend, login_as):
    await login_as("director")
    calls_before = len(backend.calls)

    view = AssignDirectorView(runtime, Department(id="d-1", name="Finance"))
    assert await view.mount() is False
    assert len(backend.calls) == calls_before


@pytest.mark.asyncio
async def test_reports_open_to_directors_only_besides_admins(runtime, backend, login_as):
    await login_as("department")
    assert await ReportsView(runtime).mount() is False
    assert runtime.navigator.location == "/dashboard/files/myfiles"


@pytest.mark.asyncio
async def test_open_view_mounts_for_any_role(runtime, backend, login_as):
    await login_as("department")
    backend.on("GET", "/api/requests/incoming", {"success": True, "requests": []})

    assert await RequestInboxView(runtime).mount() is True
    assert backend.calls_to("GET", "/api/requests/incoming")
