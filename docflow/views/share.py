# docflow/views/share.py

from docflow.core.errors import ApiError, ValidationError
from docflow.models.enums import FileStatus
from docflow.schemas.department import Department
from docflow.schemas.file import File
from docflow.services.scope import ScopeClosed
from docflow.services.workflow_service import build_share_request, validate_share
from docflow.views.base import View


class ShareFilesView(View):
    name = "share-files"
    load_error = "Failed to load files"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.files: list[File] = []
        self.departments: list[Department] = []
        self.selected_files: list[File] = []
        self.selected_departments: list[str] = []
        self.message = ""
        self.sharing = False

    async def load(self) -> None:
        # disjoint resources, fetched side by side
        self.files, self.departments = await self.scope.gather(
            self.api.list_files(status=FileStatus.Draft.value),
            self.api.list_departments(include_inactive=False),
        )

    def toggle_file(self, file_id: str, checked: bool = True) -> None:
        if checked:
            file = next((f for f in self.files if f.id == file_id), None)
            if file is not None and file not in self.selected_files:
                self.selected_files.append(file)
        else:
            self.selected_files = [f for f in self.selected_files if f.id != file_id]

    def toggle_department(self, department_id: str, checked: bool = True) -> None:
        if checked and department_id not in self.selected_departments:
            self.selected_departments.append(department_id)
        elif not checked:
            self.selected_departments = [d for d in self.selected_departments if d != department_id]

    async def share(self) -> bool:
        try:
            validate_share(self.selected_files, self.selected_departments)
        except ValidationError as exc:
            title = "Selection required" if exc.reason == "no_targets_selected" else "File cannot be shared"
            self.notifier.error(title, exc.message)
            return False

        self.sharing = True
        share = build_share_request(self.selected_departments, self.message)
        file_count = len(self.selected_files)
        department_count = len(self.selected_departments)
        try:
            for file in self.selected_files:
                await self.scope.run(self.api.share_file(file.id, share))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Sharing failed", exc.message or "Failed to share files")
            return False
        finally:
            self.sharing = False

        self.notifier.success(
            "Files shared successfully",
            f"{file_count} file(s) shared with {department_count} department(s)",
        )
        self.selected_files = []
        self.selected_departments = []
        self.message = ""

        # shared files leave draft; refetch what is left
        try:
            self.files = await self.scope.run(self.api.list_files(status=FileStatus.Draft.value))
        except ScopeClosed:
            pass
        except ApiError as exc:
            self.notifier.error("Error", exc.message or self.load_error)
        return True
