# docflow/core/rbac.py

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from docflow.core.config import settings
from docflow.core.roles import ALL_ROLES, landing_path_for, parse_role
from docflow.models.enums import Role


class SessionLike(Protocol):
    token: Optional[str]
    role: Optional[Role | str]


@dataclass(frozen=True)
class GateDecision:
    allow: bool
    redirect_target: Optional[str] = None


ALLOW = GateDecision(allow=True)


def evaluate_access(
    session: Optional[SessionLike],
    required_roles: Iterable[Role | str] = ALL_ROLES,
) -> GateDecision:
    """
    Page/action gate, evaluated synchronously on already-loaded state.

    - no session (or no token)   -> redirect to the login entry point
    - role not in required_roles -> silent downgrade to the role's landing
    """
    if session is None or not session.token:
        return GateDecision(allow=False, redirect_target=settings.LOGIN_PATH)

    # Normalize allowed roles (enum or raw string, any case)
    allowed = {parse_role(r) for r in required_roles} - {None}
    role = parse_role(session.role)

    # An unknown role only passes pages open to every authenticated role,
    # otherwise the default landing would bounce back to itself.
    if role is None:
        if allowed >= ALL_ROLES:
            return ALLOW
        return GateDecision(allow=False, redirect_target=landing_path_for(None))

    if role not in allowed:
        return GateDecision(allow=False, redirect_target=landing_path_for(role))

    return ALLOW


def has_role(session: Optional[SessionLike], *roles: Role | str) -> bool:
    return evaluate_access(session, roles).allow
