# docflow/core/roles.py

from dataclasses import dataclass, field
from typing import Optional

from docflow.models.enums import Role

# ==========================================================
# ENTRY POINTS
# ==========================================================
PUBLIC_PATHS = ("/", "/login")
DEFAULT_LANDING_PATH = "/dashboard/files/myfiles"
DEFAULT_THEME = "blue"


@dataclass(frozen=True)
class NavItem:
    name: str
    href: Optional[str] = None
    children: tuple["NavItem", ...] = ()

    def to_dict(self) -> dict:
        data = {"name": self.name, "href": self.href}
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class RoleProfile:
    role: Role
    label: str
    theme: str
    landing_path: str
    navigation: tuple[NavItem, ...] = field(default_factory=tuple)


_SETTINGS_CHILDREN = (
    NavItem("Profile", "/dashboard/settings/profile"),
    NavItem("Signature", "/dashboard/settings/signature"),
    NavItem("Notifications", "/dashboard/settings/notifications"),
)

# ==========================================================
# ROLE PROFILES
# Every role-dependent decision (theme, landing page, sidebar)
# is looked up here instead of branching on the role string.
# ==========================================================
ROLE_PROFILES: dict[Role, RoleProfile] = {
    Role.Admin: RoleProfile(
        role=Role.Admin,
        label="Administrator",
        theme="orange",
        landing_path="/dashboard",
        navigation=(
            NavItem("Dashboard", "/dashboard"),
            NavItem("Departments", children=(
                NavItem("Create New Department", "/dashboard/departments/create"),
                NavItem("View All Departments", "/dashboard/departments"),
            )),
            NavItem("Files", children=(
                NavItem("Create File", "/dashboard/files/create"),
                NavItem("All Files", "/dashboard/files"),
                NavItem("Received Files", "/dashboard/files/inbox"),
                NavItem("Shared Files", "/dashboard/files/shared"),
            )),
            NavItem("Requests", children=(
                NavItem("Create Request", "/dashboard/requests/create"),
                NavItem("All Requests", "/dashboard/requests"),
                NavItem("Received Requests", "/dashboard/requests/inbox"),
            )),
            NavItem("Reports", "/dashboard/reports"),
            NavItem("User Management", children=(
                NavItem("Admins", "/dashboard/users/admins"),
                NavItem("Directors", "/dashboard/users/directors"),
                NavItem("Department Users", "/dashboard/users/departments"),
            )),
            NavItem("Settings", children=(
                NavItem("App Settings", "/dashboard/settings/app"),
                *_SETTINGS_CHILDREN,
            )),
        ),
    ),
    Role.Director: RoleProfile(
        role=Role.Director,
        label="Director",
        theme="red",
        landing_path="/dashboard/files/inbox",
        navigation=(
            NavItem("Dashboard", "/dashboard"),
            NavItem("Files", children=(
                NavItem("Review Files", "/dashboard/files/review"),
                NavItem("Received Files", "/dashboard/files/inbox"),
            )),
            NavItem("Requests", children=(
                NavItem("Review Requests", "/dashboard/requests/review"),
                NavItem("Received Requests", "/dashboard/requests/inbox"),
            )),
            NavItem("Reports", "/dashboard/reports"),
            NavItem("Team", "/dashboard/users/departments"),
            NavItem("Settings", children=_SETTINGS_CHILDREN),
        ),
    ),
    Role.Department: RoleProfile(
        role=Role.Department,
        label="Department User",
        theme="green",
        landing_path="/dashboard/files/myfiles",
        navigation=(
            NavItem("Dashboard", "/dashboard"),
            NavItem("Files", children=(
                NavItem("Create File", "/dashboard/files/create"),
                NavItem("My Files", "/dashboard/files/myfiles"),
                NavItem("Received Files", "/dashboard/files/inbox"),
                NavItem("Shared Files", "/dashboard/files/shared"),
            )),
            NavItem("Requests", children=(
                NavItem("Create Request", "/dashboard/requests/create"),
                NavItem("My Requests", "/dashboard/requests"),
                NavItem("Received Requests", "/dashboard/requests/inbox"),
            )),
            NavItem("Settings", children=_SETTINGS_CHILDREN),
        ),
    ),
}

ALL_ROLES = frozenset(Role)
ADMIN_ONLY = frozenset({Role.Admin})

# ==========================================================
# PAGE ACCESS
# Longest matching prefix wins; unlisted dashboard pages are
# open to every authenticated role.
# ==========================================================
PAGE_ROLES: dict[str, frozenset[Role]] = {
    "/dashboard/users": ADMIN_ONLY,
    "/dashboard/users/admins": ADMIN_ONLY,
    "/dashboard/users/directors": ADMIN_ONLY,
    "/dashboard/users/departments": frozenset({Role.Admin, Role.Director}),
    "/dashboard/departments": ADMIN_ONLY,
    "/dashboard/settings/app": ADMIN_ONLY,
    "/dashboard/settings/usermanagement": ADMIN_ONLY,
    "/dashboard/reports": frozenset({Role.Admin, Role.Director}),
}


def parse_role(value) -> Optional[Role]:
    """Coerce a role string (any case) into a Role, or None if unknown."""
    if value is None or value == "":
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


def role_profile(role) -> Optional[RoleProfile]:
    parsed = parse_role(role)
    return ROLE_PROFILES.get(parsed) if parsed else None


def landing_path_for(role) -> str:
    profile = role_profile(role)
    return profile.landing_path if profile else DEFAULT_LANDING_PATH


def theme_for(role) -> str:
    profile = role_profile(role)
    return profile.theme if profile else DEFAULT_THEME


def required_roles_for(path: str) -> frozenset[Role]:
    matches = [
        prefix for prefix in PAGE_ROLES
        if path == prefix or path.startswith(prefix + "/")
    ]
    if not matches:
        return ALL_ROLES
    return PAGE_ROLES[max(matches, key=len)]
