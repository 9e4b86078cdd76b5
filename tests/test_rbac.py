from dataclasses import dataclass
from typing import Optional

from docflow.core.rbac import evaluate_access, has_role
from docflow.core.roles import ADMIN_ONLY, ALL_ROLES
from docflow.models.enums import Role


@dataclass
class Snapshot:
    token: Optional[str]
    role: Optional[str]


def test_no_session_redirects_to_login():
    decision = evaluate_access(None, ADMIN_ONLY)
    assert not decision.allow
    assert decision.redirect_target == "/login"


def test_token_missing_redirects_to_login_even_with_role():
    decision = evaluate_access(Snapshot(token=None, role="admin"), ADMIN_ONLY)
    assert decision.redirect_target == "/login"


def test_allowed_role_passes():
    decision = evaluate_access(Snapshot("t", "admin"), ADMIN_ONLY)
    assert decision.allow
    assert decision.redirect_target is None


def test_wrong_role_is_downgraded_to_its_landing():
    decision = evaluate_access(Snapshot("t", "director"), ADMIN_ONLY)
    assert not decision.allow
    assert decision.redirect_target == "/dashboard/files/inbox"

    decision = evaluate_access(Snapshot("t", "department"), [Role.Admin, "director"])
    assert decision.redirect_target == "/dashboard/files/myfiles"


def test_required_roles_accept_raw_strings_any_case():
    assert evaluate_access(Snapshot("t", "Director"), ["DIRECTOR"]).allow


def test_unknown_role_only_reaches_open_pages():
    assert evaluate_access(Snapshot("t", "janitor"), ALL_ROLES).allow
    decision = evaluate_access(Snapshot("t", "janitor"), ADMIN_ONLY)
    assert decision.redirect_target == "/dashboard/files/myfiles"


def test_has_role():
    assert has_role(Snapshot("t", "admin"), Role.Admin)
    assert not has_role(Snapshot("t", "admin"), Role.Director)
    assert not has_role(None, Role.Admin)
