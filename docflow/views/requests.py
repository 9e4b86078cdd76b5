# docflow/views/requests.py

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.schemas.department import Department
from docflow.schemas.request import Request, RequestCreate
from docflow.schemas.user import User
from docflow.services.scope import ScopeClosed
from docflow.services.workflow_service import validate_request_create
from docflow.views.base import View

REQUESTS_PATH = "/dashboard/requests"

_VALIDATION_TITLES = {
    "title_required": "Title required",
    "description_required": "Description required",
    "department_required": "Department required",
}


class RequestCreateView(View):
    """New request form; the director list follows the chosen department."""

    name = "request-create"
    load_error = "Failed to load departments"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.departments: list[Department] = []
        self.directors: list[User] = []
        self.submitting = False

    async def load(self) -> None:
        self.departments = await self.api.list_departments(include_inactive=False)

    async def choose_department(self, department_id: str) -> list[User]:
        try:
            directors = await self.scope.run(self.api.list_directors())
        except ScopeClosed:
            return []
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to load directors")
            return []
        self.directors = [d for d in directors if d.department == department_id]
        return self.directors

    async def submit(self, payload: RequestCreate) -> bool:
        try:
            validate_request_create(payload)
        except ValidationError as exc:
            self.notifier.error(_VALIDATION_TITLES.get(exc.reason, "Validation Error"), exc.message)
            return False

        self.submitting = True
        try:
            await self.scope.run(self.api.create_request(payload))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Submission failed", exc.message or "Failed to submit request")
            return False
        finally:
            self.submitting = False

        self.notifier.success(
            "Request submitted successfully",
            f'Your request "{payload.title}" has been submitted',
        )
        self.navigator.navigate(REQUESTS_PATH)
        return True


class MyRequestsView(View):
    name = "my-requests"
    load_error = "Failed to load requests"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.requests: list[Request] = []
        self.search = ""

    async def load(self) -> None:
        self.requests = await self.api.list_requests()

    @property
    def visible_requests(self) -> list[Request]:
        term = self.search.strip().lower()
        if not term:
            return list(self.requests)
        return [
            r for r in self.requests
            if term in r.title.lower() or term in r.description.lower()
        ]

    def get(self, request_id: str) -> Optional[Request]:
        return next((r for r in self.requests if r.id == request_id), None)
