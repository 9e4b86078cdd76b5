# docflow/api/deps.py

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from docflow.core.rbac import evaluate_access
from docflow.core.roles import ALL_ROLES, required_roles_for
from docflow.core.storage import ROLE_KEY, TOKEN_KEY
from docflow.models.enums import Role


# ------------------------------------------------------------
# Session snapshot read from the request cookies
# ------------------------------------------------------------
@dataclass(frozen=True)
class CookieSession:
    token: Optional[str]
    role: Optional[str]


def get_cookie_session(request: Request) -> CookieSession:
    return CookieSession(
        token=request.cookies.get(TOKEN_KEY),
        role=request.cookies.get(ROLE_KEY),
    )


class GateRedirect(Exception):
    """Raised by page dependencies; the app turns it into a redirect."""

    def __init__(self, target: str):
        super().__init__(target)
        self.target = target


# ------------------------------------------------------------
# Page gate: redirect (never an error page) on a failed check
# ------------------------------------------------------------
def page_access(
    request: Request,
    session: CookieSession = Depends(get_cookie_session),
) -> CookieSession:
    decision = evaluate_access(session, required_roles_for(request.url.path))
    if not decision.allow:
        raise GateRedirect(decision.redirect_target)
    return session


def AllowRoles(*allowed_roles: Role | str):
    """
    Page dependency for an explicit role list:
    - no token          -> redirect to login
    - role not allowed  -> redirect to the role's landing page
    """
    allowed = tuple(allowed_roles) or tuple(ALL_ROLES)

    async def gate(session: CookieSession = Depends(get_cookie_session)) -> CookieSession:
        decision = evaluate_access(session, allowed)
        if not decision.allow:
            raise GateRedirect(decision.redirect_target)
        return session

    return gate


# ------------------------------------------------------------
# API gate: plain 401 / 403 for JSON callers
# ------------------------------------------------------------
def role_required(*allowed_roles: Role):
    allowed = frozenset(allowed_roles) or ALL_ROLES

    async def checker(session: CookieSession = Depends(get_cookie_session)) -> CookieSession:
        if not session.token:
            raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Not authenticated")

        if not evaluate_access(session, allowed).allow:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role '{session.role}'",
            )
        return session

    return checker


require_report_access = role_required(Role.Admin, Role.Director)
