# docflow/api/middleware.py

from typing import Callable, Optional

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from docflow.core.config import settings
from docflow.core.roles import PUBLIC_PATHS, landing_path_for, parse_role
from docflow.core.storage import ROLE_KEY, TOKEN_KEY
from docflow.models.enums import Role

# Never gated at the edge: backend proxy, assets
UNGATED_PREFIXES = ("/api", "/static", "/favicon.ico")
DASHBOARD_ROOT = "/dashboard"


def is_ungated(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in UNGATED_PREFIXES)


def resolve_edge_action(path: str, token: Optional[str], role: Optional[str]) -> Optional[str]:
    """
    Decide a request from cookies alone. Returns the redirect target, or
    None to let the request through.
    """
    # "/dashboard/" is the same page as "/dashboard"
    path = path.rstrip("/") or "/"

    if is_ungated(path):
        return None

    if path in PUBLIC_PATHS:
        # signed-in users skip the login / home page
        return landing_path_for(role) if token else None

    if not token:
        return settings.LOGIN_PATH

    # the bare dashboard is the admin overview
    if path == DASHBOARD_ROOT and parse_role(role) != Role.Admin:
        return landing_path_for(role)

    return None


class EdgeGatingMiddleware(BaseHTTPMiddleware):
    """Cookie-based gating that runs before any page handler."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        target = resolve_edge_action(
            path,
            request.cookies.get(TOKEN_KEY),
            request.cookies.get(ROLE_KEY),
        )
        if target is not None and target != path:
            logger.debug(f"Edge redirect {path} -> {target}")
            return RedirectResponse(target, status_code=307)
        return await call_next(request)
