# docflow/views/users.py

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.core.roles import ADMIN_ONLY
from docflow.models.enums import Role
from docflow.schemas.department import Department
from docflow.schemas.user import User, UserCreate, UserUpdate
from docflow.services.directory_service import (
    filter_users,
    validate_password_reset,
    validate_user_create,
)
from docflow.services.scope import ScopeClosed
from docflow.views.base import View


class UserManagementView(View):
    name = "user-management"
    required_roles = ADMIN_ONLY
    load_error = "Failed to load users"

    def __init__(self, runtime, role: Optional[Role] = None):
        super().__init__(runtime)
        self.role = role
        self.users: list[User] = []
        self.departments: list[Department] = []
        self.search = ""
        self.submitting = False

    async def load(self) -> None:
        users_call = (
            self.api.list_users_by_role(self.role) if self.role else self.api.list_users()
        )
        self.users, self.departments = await self.scope.gather(
            users_call,
            self.api.list_departments(include_inactive=False),
        )

    @property
    def visible_users(self) -> list[User]:
        return filter_users(self.users, self.search)

    def _replace(self, user: User) -> None:
        self.users = [user if u.id == user.id else u for u in self.users]

    # ------------------------------------------------------------
    # Create
    # ------------------------------------------------------------
    async def create_user(self, payload: UserCreate) -> Optional[User]:
        try:
            validate_user_create(payload, self.departments)
        except ValidationError as exc:
            self.notifier.error("Validation Error", exc.message)
            return None

        self.submitting = True
        try:
            user = await self.scope.run(self.api.create_user(payload))
        except ScopeClosed:
            return None
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to create user")
            return None
        finally:
            self.submitting = False

        if user is None:
            # bare success envelope: pick the new account up from a reload
            await self.refresh()
            user = next((u for u in self.users if u.email == payload.email), None)
        else:
            self.users = [*self.users, user]
        self.notifier.success(
            "User created successfully",
            f"{payload.first_name} {payload.last_name} has been created",
        )
        return user

    # ------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------
    async def update_user(self, user: User, payload: UserUpdate) -> Optional[User]:
        self.submitting = True
        try:
            updated = await self.scope.run(self.api.update_user(user.id, payload))
        except ScopeClosed:
            return None
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update user")
            return None
        finally:
            self.submitting = False

        updated = updated or user.model_copy(update=payload.model_dump(exclude_none=True))
        self._replace(updated)
        self.notifier.success("User updated successfully", f"{updated.full_name} has been updated")
        return updated

    # ------------------------------------------------------------
    # Reset password
    # ------------------------------------------------------------
    async def reset_password(self, user: User, new_password: str, confirm_password: str) -> bool:
        try:
            validate_password_reset(new_password, confirm_password)
        except ValidationError as exc:
            self.notifier.error("Validation Error", exc.message)
            return False

        self.submitting = True
        try:
            await self.scope.run(self.api.reset_user_password(user.id, new_password))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to reset password")
            return False
        finally:
            self.submitting = False

        self.notifier.success(
            "Password reset successfully",
            f"Password for {user.full_name} has been reset",
        )
        return True

    # ------------------------------------------------------------
    # Activate / deactivate
    # ------------------------------------------------------------
    async def toggle_status(self, user: User) -> bool:
        try:
            updated = await self.scope.run(self.api.toggle_user_status(user.id))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update user status")
            return False

        updated = updated or user.model_copy(update={"is_active": not user.is_active})
        self._replace(updated)
        state = "activated" if updated.is_active else "deactivated"
        self.notifier.success("User status updated", f"{updated.full_name} has been {state}")
        return True

    # ------------------------------------------------------------
    # Delete (remote call; locally just a cache update)
    # ------------------------------------------------------------
    async def delete_user(self, user: User) -> bool:
        try:
            await self.scope.run(self.api.delete_user(user.id))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to delete user")
            return False

        self.users = [u for u in self.users if u.id != user.id]
        self.notifier.success("User deleted", f"{user.full_name} has been removed")
        return True
