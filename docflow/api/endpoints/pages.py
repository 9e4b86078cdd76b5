# docflow/api/endpoints/pages.py
#
# Page shells: the data a client needs to draw the layout for a route
# (theme, sidebar, signed-in role). Gating happens in the dependencies.

from typing import Optional

from fastapi import APIRouter, Depends, Request

from docflow.api.deps import AllowRoles, CookieSession, page_access
from docflow.core.roles import DEFAULT_THEME, parse_role, role_profile
from docflow.models.enums import Role

router = APIRouter(tags=["Pages"])


def page_shell(path: str, role: Optional[str]) -> dict:
    profile = role_profile(role)
    parsed = parse_role(role)
    return {
        "path": path,
        "role": parsed.value if parsed else None,
        "label": profile.label if profile else None,
        "theme": profile.theme if profile else DEFAULT_THEME,
        "navigation": [item.to_dict() for item in profile.navigation] if profile else [],
    }


# ---------------- PUBLIC ----------------
@router.get("/")
async def home():
    return {"path": "/", "page": "home", "theme": DEFAULT_THEME}


@router.get("/login")
async def login_page():
    return {"path": "/login", "page": "login", "theme": DEFAULT_THEME}


# ---------------- DASHBOARD ----------------
@router.get("/dashboard")
async def dashboard_overview(session: CookieSession = Depends(AllowRoles(Role.Admin))):
    return page_shell("/dashboard", session.role)


@router.get("/dashboard/{page_path:path}")
async def dashboard_page(
    page_path: str,
    request: Request,
    session: CookieSession = Depends(page_access),
):
    return page_shell(request.url.path, session.role)
