import pytest

from docflow.api.middleware import resolve_edge_action


@pytest.mark.parametrize("path", ["/", "/login"])
def test_public_paths_pass_without_token(path):
    assert resolve_edge_action(path, None, None) is None


@pytest.mark.parametrize("path", ["/dashboard", "/dashboard/files/myfiles", "/dashboard/users/admins"])
def test_private_paths_without_token_go_to_login(path):
    assert resolve_edge_action(path, None, "admin") == "/login"


@pytest.mark.parametrize("role, landing", [
    ("admin", "/dashboard"),
    ("director", "/dashboard/files/inbox"),
    ("department", "/dashboard/files/myfiles"),
    (None, "/dashboard/files/myfiles"),
])
def test_signed_in_users_skip_public_pages(role, landing):
    assert resolve_edge_action("/login", "tok", role) == landing
    assert resolve_edge_action("/", "tok", role) == landing


def test_bare_dashboard_is_admin_only():
    assert resolve_edge_action("/dashboard", "tok", "admin") is None
    assert resolve_edge_action("/dashboard", "tok", "director") == "/dashboard/files/inbox"
    assert resolve_edge_action("/dashboard", "tok", "Department") == "/dashboard/files/myfiles"
    assert resolve_edge_action("/dashboard/", "tok", "admin") is None
    assert resolve_edge_action("/dashboard/", "tok", "director") == "/dashboard/files/inbox"
    assert resolve_edge_action("/dashboard//", "tok", "department") == "/dashboard/files/myfiles"


def test_other_private_paths_pass_with_token():
    assert resolve_edge_action("/dashboard/files/inbox", "tok", "director") is None
    # role gating for individual pages happens in the page handlers
    assert resolve_edge_action("/dashboard/users/admins", "tok", "department") is None


@pytest.mark.parametrize("path", ["/api/health", "/static/app.css", "/favicon.ico"])
def test_assets_and_api_are_not_gated(path):
    assert resolve_edge_action(path, None, None) is None


def test_prefix_match_is_per_segment():
    assert resolve_edge_action("/apiary", None, None) == "/login"
