# docflow/views/departments.py

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.core.roles import ADMIN_ONLY
from docflow.schemas.department import Department, DepartmentCreate, DepartmentUpdate
from docflow.schemas.user import User
from docflow.services.directory_service import (
    filter_departments,
    unassigned_directors,
    validate_director_assignment,
)
from docflow.services.scope import ScopeClosed
from docflow.views.base import View


class DepartmentsView(View):
    name = "departments"
    required_roles = ADMIN_ONLY
    load_error = "Failed to load departments"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.departments: list[Department] = []
        self.search = ""
        self.submitting = False

    async def load(self) -> None:
        self.departments = await self.api.list_departments(include_inactive=True)

    @property
    def visible_departments(self) -> list[Department]:
        return filter_departments(self.departments, self.search)

    async def create_department(self, payload: DepartmentCreate) -> Optional[Department]:
        if not payload.name.strip() or not payload.code.strip():
            self.notifier.error("Validation Error", "Name and code are required")
            return None

        self.submitting = True
        try:
            department = await self.scope.run(self.api.create_department(payload))
        except ScopeClosed:
            return None
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to create department")
            return None
        finally:
            self.submitting = False

        if department is None:
            await self.refresh()
            department = next((d for d in self.departments if d.code == payload.code), None)
        else:
            self.departments = [*self.departments, department]
        self.notifier.success("Department created", f"{payload.name} has been created")
        return department

    async def update_department(self, department: Department, payload: DepartmentUpdate) -> Optional[Department]:
        self.submitting = True
        try:
            updated = await self.scope.run(self.api.update_department(department.id, payload))
        except ScopeClosed:
            return None
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to update department")
            return None
        finally:
            self.submitting = False

        updated = updated or department.model_copy(update=payload.model_dump(exclude_none=True))
        self.departments = [updated if d.id == updated.id else d for d in self.departments]
        self.notifier.success("Department updated", f"{updated.name} has been updated")
        return updated

    async def delete_department(self, department: Department) -> bool:
        try:
            await self.scope.run(self.api.delete_department(department.id))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to delete department")
            return False

        self.departments = [d for d in self.departments if d.id != department.id]
        self.notifier.success("Department deleted", f"{department.name} has been deleted")
        return True


class AssignDirectorView(View):
    """Director picker for one department; only unassigned directors are offered."""

    name = "assign-director"
    required_roles = ADMIN_ONLY
    load_error = "Failed to load available directors"

    def __init__(self, runtime, department: Department):
        super().__init__(runtime)
        self.department = department
        self.directors: list[User] = []
        self.selected_director_id: Optional[str] = None
        self.assigning = False

    async def load(self) -> None:
        candidates = await self.api.list_unassigned_directors()
        self.directors = unassigned_directors(candidates)

    async def assign(self, director_id: Optional[str] = None) -> bool:
        if director_id is not None:
            self.selected_director_id = director_id
        try:
            validate_director_assignment(self.department, self.selected_director_id)
        except ValidationError as exc:
            self.notifier.error("Selection Required", exc.message)
            return False

        self.assigning = True
        try:
            updated = await self.scope.run(
                self.api.assign_director(self.department.id, self.selected_director_id)
            )
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to assign director")
            return False
        finally:
            self.assigning = False

        self.department = updated or self.department.model_copy(
            update={"director": self.selected_director_id}
        )
        self.directors = [d for d in self.directors if d.id != self.selected_director_id]
        self.selected_director_id = None
        self.notifier.success("Success", "Director assigned successfully")
        return True
