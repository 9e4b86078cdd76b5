# docflow/services/directory_service.py

from typing import Iterable, Optional, Sequence

from docflow.core.config import settings
from docflow.core.errors import ValidationError
from docflow.models.enums import Role
from docflow.schemas.department import Department
from docflow.schemas.user import User, UserCreate


# ============================================================================
# USER CREATION
# ============================================================================
def validate_user_create(payload: UserCreate, departments: Sequence[Department] = ()) -> None:
    if not (payload.first_name and payload.last_name and payload.email and payload.password):
        raise ValidationError("missing_fields", "Please fill in all required fields")

    # Directors and department users belong to a department whenever one exists
    if payload.role != Role.Admin and not payload.department and len(departments) > 0:
        raise ValidationError("department_required", "Please select a department")


# ============================================================================
# PASSWORD RESET (admin sets a new password for a user)
# ============================================================================
def validate_password_reset(new_password: str, confirm_password: str) -> None:
    if not new_password or not confirm_password:
        raise ValidationError("missing_fields", "Please fill in all fields")

    if new_password != confirm_password:
        raise ValidationError("password_mismatch", "Passwords do not match")

    if len(new_password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(
            "password_too_short",
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long",
        )


# ============================================================================
# DIRECTOR ASSIGNMENT
# ============================================================================
def unassigned_directors(
    users: Iterable[User],
    departments: Iterable[Department] = (),
) -> list[User]:
    """
    Directors that may still be assigned: role is director, no department
    on the user and not already the director of some department.
    """
    taken = {d.director for d in departments if d.director}
    return [
        u for u in users
        if u.role == Role.Director and not u.department and u.id not in taken
    ]


def validate_director_assignment(department: Optional[Department], director_id: Optional[str]) -> None:
    if department is None:
        raise ValidationError("no_department_selected", "Select a department first")
    if not director_id:
        raise ValidationError("director_required", "Please select a director to assign")


# ============================================================================
# FILTERS (pure client-side recomputation)
# ============================================================================
def filter_users(
    users: Iterable[User],
    search: str = "",
    role: Optional[Role] = None,
    active: Optional[bool] = None,
) -> list[User]:
    needle = search.strip().lower()
    result = []
    for user in users:
        if role is not None and user.role != role:
            continue
        if active is not None and user.is_active != active:
            continue
        if needle and needle not in f"{user.full_name} {user.email}".lower():
            continue
        result.append(user)
    return result


def filter_departments(departments: Iterable[Department], search: str = "") -> list[Department]:
    needle = search.strip().lower()
    if not needle:
        return list(departments)
    return [
        d for d in departments
        if needle in d.name.lower() or needle in d.code.lower() or needle in d.description.lower()
    ]
