from unittest.mock import patch

import pytest


def cookies(token=None, role=None):
    parts = []
    if token:
        parts.append(f"token={token}")
    if role:
        parts.append(f"userRole={role}")
    return {"Cookie": "; ".join(parts)} if parts else {}


@pytest.mark.asyncio
async def test_login_page_is_public(client):
    res = await client.get("/login")
    assert res.status_code == 200
    assert res.json()["page"] == "login"


@pytest.mark.asyncio
async def test_dashboard_without_token_redirects_to_login(client):
    res = await client.get("/dashboard/files/myfiles")
    assert res.status_code == 307
    assert res.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_signed_in_login_redirects_to_landing(client):
    res = await client.get("/login", headers=cookies("tok", "director"))
    assert res.status_code == 307
    assert res.headers["location"] == "/dashboard/files/inbox"


@pytest.mark.asyncio
async def test_admin_overview_shell(client):
    res = await client.get("/dashboard", headers=cookies("tok", "admin"))
    assert res.status_code == 200
    body = res.json()
    assert body["role"] == "admin"
    assert body["theme"] == "orange"
    assert body["navigation"][0] == {"name": "Dashboard", "href": "/dashboard"}


@pytest.mark.asyncio
async def test_non_admin_overview_redirects(client):
    res = await client.get("/dashboard", headers=cookies("tok", "department"))
    assert res.status_code == 307
    assert res.headers["location"] == "/dashboard/files/myfiles"


@pytest.mark.asyncio
async def test_trailing_slash_overview_redirects_non_admin(client):
    res = await client.get("/dashboard/", headers=cookies("tok", "director"))
    assert res.status_code == 307
    assert res.headers["location"] == "/dashboard/files/inbox"


@pytest.mark.asyncio
async def test_page_shell_uses_role_profile(client):
    res = await client.get("/dashboard/files/inbox", headers=cookies("tok", "director"))
    assert res.status_code == 200
    body = res.json()
    assert body["path"] == "/dashboard/files/inbox"
    assert body["theme"] == "red"
    assert body["label"] == "Director"


@pytest.mark.asyncio
async def test_admin_page_downgrades_other_roles(client):
    res = await client.get("/dashboard/users/admins", headers=cookies("tok", "director"))
    assert res.status_code == 307
    assert res.headers["location"] == "/dashboard/files/inbox"

    res = await client.get("/dashboard/users/departments", headers=cookies("tok", "director"))
    assert res.status_code == 200


@pytest.mark.asyncio
async def test_health_is_not_gated(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "Online"


REPORT = {
    "type": "requests",
    "dateRange": {"from": "2024-01-01", "to": "2024-01-31"},
    "data": {"totalRequests": 4},
}


@pytest.mark.asyncio
async def test_report_export_requires_token(client):
    res = await client.post("/api/reports/export", json=REPORT)
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_report_export_forbidden_for_department_users(client):
    res = await client.post("/api/reports/export", json=REPORT, headers=cookies("tok", "department"))
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_report_export_excel(client):
    res = await client.post(
        "/api/reports/export",
        params={"format": "excel"},
        json=REPORT,
        headers=cookies("tok", "director"),
    )
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert "requests-report-" in res.headers["content-disposition"]
    assert res.content[:2] == b"PK"


@pytest.mark.asyncio
async def test_report_export_pdf_failure_is_500(client):
    with patch("docflow.services.report_service.pdfkit") as mock_pdfkit:
        mock_pdfkit.from_string.side_effect = OSError("No wkhtmltopdf executable found")
        res = await client.post("/api/reports/export", json=REPORT, headers=cookies("tok", "admin"))

    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to generate report"
