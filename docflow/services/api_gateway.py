# docflow/services/api_gateway.py

from typing import Any, Optional

from docflow.core.errors import ApiError
from docflow.models.enums import Role
from docflow.schemas.dashboard import (
    AdminDashboardStats,
    DepartmentDashboardStats,
    DirectorDashboardStats,
)
from docflow.schemas.auth import LoginRequest
from docflow.schemas.department import Department, DepartmentCreate, DepartmentUpdate, Folder
from docflow.schemas.envelope import ApiResponse
from docflow.schemas.file import File, FileActionPayload, ShareRequest
from docflow.schemas.notification import Notification
from docflow.schemas.report import ReportStats
from docflow.schemas.request import Request, RequestActionPayload, RequestCreate
from docflow.schemas.user import Signature, User, UserCreate, UserUpdate
from docflow.services.api_client import ApiClient


def expect(response: ApiResponse, fallback: str) -> ApiResponse:
    """success=false is handled exactly like a thrown error."""
    if not response.success:
        raise ApiError(response.error or response.message or fallback)
    return response


def _parse_list(model, items: Optional[list]) -> list:
    return [model.model_validate(item) for item in (items or [])]


def _parse_one(model, item: Any):
    # a bare success envelope carries no entity
    return model.model_validate(item) if item else None


class DocflowApi:
    """Typed request functions for the document/workflow backend."""

    def __init__(self, client: ApiClient):
        self.client = client

    # ============================================================================
    # AUTH
    # ============================================================================
    async def login(self, email: str, password: str) -> tuple[str, User]:
        response = expect(
            await self.client.post("/api/auth/login", LoginRequest(email=email, password=password).model_dump()),
            "Login failed",
        )
        token = response.pick("token")
        user = response.pick("user")
        if not token or not user:
            raise ApiError("Login failed")
        return token, User.model_validate(user)

    async def get_me(self) -> User:
        response = expect(await self.client.get("/api/auth/me"), "Failed to get user")
        user = response.pick("user")
        if not user:
            raise ApiError("Failed to get user")
        return User.model_validate(user)

    async def update_profile(self, data: dict) -> Optional[User]:
        response = expect(await self.client.put("/api/auth/profile", data), "Failed to update profile")
        return _parse_one(User, response.pick("user"))

    async def change_password(self, current_password: str, new_password: str) -> None:
        expect(
            await self.client.put(
                "/api/auth/password",
                {"currentPassword": current_password, "newPassword": new_password},
            ),
            "Failed to change password",
        )

    async def get_signature(self) -> Optional[Signature]:
        response = expect(await self.client.get("/api/auth/signature"), "Failed to load signature")
        signature = response.pick("signature")
        return Signature.model_validate(signature) if signature else None

    async def update_signature(self, signature: Signature) -> Signature:
        response = expect(
            await self.client.put("/api/auth/signature", signature.to_payload()),
            "Failed to update signature",
        )
        return Signature.model_validate(response.pick("signature", signature.to_payload()))

    # ============================================================================
    # USERS
    # ============================================================================
    async def list_users(self) -> list[User]:
        response = expect(await self.client.get("/api/users"), "Failed to load users")
        return _parse_list(User, response.pick("users"))

    async def list_users_by_role(self, role: Role) -> list[User]:
        response = expect(await self.client.get(f"/api/users/role/{role.value}"), "Failed to load users")
        return _parse_list(User, response.pick("users"))

    async def list_directors(self) -> list[User]:
        response = expect(await self.client.get("/api/users/directors"), "Failed to load directors")
        return _parse_list(User, response.pick("directors"))

    async def list_unassigned_directors(self) -> list[User]:
        response = expect(
            await self.client.get("/api/users/directors/unassigned"),
            "Failed to load available directors",
        )
        return _parse_list(User, response.pick("directors"))

    async def create_user(self, payload: UserCreate) -> Optional[User]:
        # one registration endpoint per role
        body = payload.to_payload()
        if payload.role == Role.Director:
            body.pop("role", None)
            response = await self.client.post("/api/auth/register-director", body)
        elif payload.role == Role.Department:
            body.pop("role", None)
            response = await self.client.post("/api/auth/department/register", body)
        else:
            response = await self.client.post("/api/auth/register", body)
        response = expect(response, "Failed to create user")
        return _parse_one(User, response.pick("user"))

    async def update_user(self, user_id: str, payload: UserUpdate) -> Optional[User]:
        response = expect(
            await self.client.put(f"/api/users/{user_id}", payload.to_payload()),
            "Failed to update user",
        )
        return _parse_one(User, response.pick("user"))

    async def delete_user(self, user_id: str) -> None:
        expect(await self.client.delete(f"/api/users/{user_id}"), "Failed to delete user")

    async def reset_user_password(self, user_id: str, new_password: str) -> None:
        expect(
            await self.client.put(f"/api/users/{user_id}/reset-password", {"newPassword": new_password}),
            "Failed to reset password",
        )

    async def toggle_user_status(self, user_id: str) -> Optional[User]:
        response = expect(
            await self.client.put(f"/api/users/{user_id}/toggle-status"),
            "Failed to update user status",
        )
        return _parse_one(User, response.pick("user"))

    # ============================================================================
    # DEPARTMENTS
    # ============================================================================
    async def list_departments(self, include_inactive: bool = False) -> list[Department]:
        response = expect(
            await self.client.get("/api/departments", {"includeInactive": str(include_inactive).lower()}),
            "Failed to load departments",
        )
        return _parse_list(Department, response.pick("departments"))

    async def create_department(self, payload: DepartmentCreate) -> Optional[Department]:
        response = expect(
            await self.client.post("/api/departments", payload.to_payload()),
            "Failed to create department",
        )
        return _parse_one(Department, response.pick("department"))

    async def update_department(self, department_id: str, payload: DepartmentUpdate) -> Optional[Department]:
        response = expect(
            await self.client.put(f"/api/departments/{department_id}", payload.to_payload()),
            "Failed to update department",
        )
        return _parse_one(Department, response.pick("department"))

    async def delete_department(self, department_id: str) -> None:
        expect(await self.client.delete(f"/api/departments/{department_id}"), "Failed to delete department")

    async def assign_director(self, department_id: str, director_id: str) -> Optional[Department]:
        response = expect(
            await self.client.put(
                f"/api/departments/{department_id}/assign-director",
                {"directorId": director_id},
            ),
            "Failed to assign director",
        )
        return _parse_one(Department, response.pick("department"))

    # ============================================================================
    # FOLDERS & FILES
    # ============================================================================
    async def list_folders(self, parent_id: Optional[str] = None, folder_type: Optional[str] = None) -> list[Folder]:
        response = expect(
            await self.client.get("/api/structure/folders", {"parentId": parent_id, "type": folder_type}),
            "Failed to load folders",
        )
        return _parse_list(Folder, response.pick("folders"))

    async def create_folder(self, data: dict) -> Optional[Folder]:
        response = expect(await self.client.post("/api/structure/folders", data), "Failed to create folder")
        return _parse_one(Folder, response.pick("folder"))

    async def list_files(
        self,
        status: Optional[str] = None,
        department: Optional[str] = None,
        category: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> list[File]:
        params = {"status": status, "department": department, "category": category, "folderId": folder_id}
        response = expect(await self.client.get("/api/structure/files", params), "Failed to load files")
        return _parse_list(File, response.pick("files"))

    async def list_inbox_files(self) -> list[File]:
        response = expect(await self.client.get("/api/structure/inbox/files"), "Failed to load files")
        return _parse_list(File, response.pick("files"))

    async def list_shared_files(self) -> list[File]:
        response = expect(await self.client.get("/api/structure/shared-files"), "Failed to load shared files")
        return _parse_list(File, response.pick("files"))

    async def upload_file(self, fields: dict, filename: str, content: bytes, content_type: str) -> Optional[File]:
        response = expect(
            await self.client.upload_form(
                "/api/structure/file",
                fields,
                {"file": (filename, content, content_type)},
            ),
            "Upload failed",
        )
        return _parse_one(File, response.pick("file"))

    async def share_file(self, file_id: str, share: ShareRequest) -> None:
        expect(
            await self.client.post(f"/api/structure/file/{file_id}/share", share.to_payload()),
            "Failed to share file",
        )

    async def delete_file(self, file_id: str) -> None:
        expect(await self.client.delete(f"/api/structure/file/{file_id}"), "Failed to delete file")

    async def take_file_action(self, file_id: str, payload: FileActionPayload) -> None:
        expect(
            await self.client.put(f"/api/structure/file/{file_id}/action", payload.to_payload()),
            f"Failed to {payload.action.value} file",
        )

    # ============================================================================
    # REQUESTS
    # ============================================================================
    async def create_request(self, payload: RequestCreate) -> Optional[Request]:
        response = expect(
            await self.client.post("/api/requests", payload.to_payload()),
            "Failed to create request",
        )
        return _parse_one(Request, response.pick("request"))

    async def list_requests(self) -> list[Request]:
        response = expect(await self.client.get("/api/requests"), "Failed to load requests")
        return _parse_list(Request, response.pick("requests"))

    async def list_incoming_requests(self) -> list[Request]:
        response = expect(await self.client.get("/api/requests/incoming"), "Failed to load requests")
        return _parse_list(Request, response.pick("requests"))

    async def take_request_action(self, request_id: str, payload: RequestActionPayload) -> None:
        expect(
            await self.client.put(f"/api/requests/{request_id}/action", payload.to_payload()),
            f"Failed to {payload.action.value} request",
        )

    # ============================================================================
    # DASHBOARDS & REPORTS
    # ============================================================================
    async def admin_dashboard(self) -> AdminDashboardStats:
        response = expect(await self.client.get("/api/admin/dashboard"), "Failed to load dashboard")
        return AdminDashboardStats.model_validate(response.pick("stats", {}))

    async def director_dashboard(self) -> DirectorDashboardStats:
        response = expect(await self.client.get("/api/admin/director/dashboard"), "Failed to load dashboard")
        return DirectorDashboardStats.model_validate(response.pick("stats", {}))

    async def department_dashboard(self, department_id: str) -> DepartmentDashboardStats:
        response = expect(
            await self.client.get(f"/api/admin/departments/{department_id}/stats"),
            "Failed to load dashboard",
        )
        return DepartmentDashboardStats.model_validate(response.pick("stats", {}))

    async def report_data(self, params: dict[str, Any]) -> ReportStats:
        response = expect(await self.client.get("/api/reports/data", params), "Failed to load report data")
        payload = response.pick("data", response.data)
        return ReportStats.model_validate(payload or {})

    # ============================================================================
    # NOTIFICATIONS
    # ============================================================================
    async def list_notifications(self) -> list[Notification]:
        response = expect(await self.client.get("/api/notifications"), "Failed to load notifications")
        return _parse_list(Notification, response.pick("notifications"))

    async def mark_notification_read(self, notification_id: str) -> None:
        expect(
            await self.client.put(f"/api/notifications/{notification_id}/read"),
            "Failed to update notification",
        )

    async def mark_all_notifications_read(self) -> None:
        expect(await self.client.get("/api/notifications/read-all"), "Failed to update notifications")
