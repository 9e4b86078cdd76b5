# docflow/views/files.py

from typing import Optional

from docflow.core.errors import ApiError, ValidationError
from docflow.models.enums import FileAction, FolderAccessLevel
from docflow.schemas.department import Folder
from docflow.schemas.file import File
from docflow.services.scope import ScopeClosed
from docflow.services.workflow_service import (
    FILE_ACTION_PAST_TENSE,
    FILE_REVIEW_OUTCOMES,
    build_file_action_payload,
    validate_file_action,
)
from docflow.views.base import View


def _matches(file: File, term: str) -> bool:
    term = term.strip().lower()
    if not term:
        return True
    return term in file.title.lower() or term in (file.category or "").lower()


class _FileListView(View):
    """Shared list plumbing: search box plus local delete."""

    load_error = "Failed to load files"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.files: list[File] = []
        self.selected: Optional[File] = None
        self.search = ""
        self.processing = False

    @property
    def visible_files(self) -> list[File]:
        return [f for f in self.files if _matches(f, self.search)]

    def select(self, file_id: str) -> Optional[File]:
        self.selected = next((f for f in self.files if f.id == file_id), None)
        return self.selected

    async def delete_file(self, file_id: Optional[str] = None) -> bool:
        file = self.select(file_id) if file_id else self.selected
        if file is None:
            return False

        self.processing = True
        try:
            await self.scope.run(self.api.delete_file(file.id))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to delete file")
            return False
        finally:
            self.processing = False

        self.files = [f for f in self.files if f.id != file.id]
        self.selected = None
        self.notifier.success("Success", "File deleted successfully")
        return True


# ------------------------------------------------------------
# Received files: review decisions from the inbox
# ------------------------------------------------------------
class FileInboxView(_FileListView):
    name = "file-inbox"
    load_error = "Failed to load inbox files"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.comment = ""
        self.require_signature = False

    async def load(self) -> None:
        self.files = await self.api.list_inbox_files()

    def select(self, file_id: str) -> Optional[File]:
        self.comment = ""
        self.require_signature = False
        return super().select(file_id)

    async def take_action(
        self,
        action: FileAction | str,
        comment: Optional[str] = None,
        require_signature: Optional[bool] = None,
    ) -> bool:
        if comment is not None:
            self.comment = comment
        if require_signature is not None:
            self.require_signature = require_signature

        file = self.selected
        try:
            action = validate_file_action(file, action, self.comment)
        except ValidationError as exc:
            title = "Comment required" if exc.reason == "comment_required" else "Action not allowed"
            self.notifier.error(title, exc.message)
            return False

        self.processing = True
        try:
            payload = build_file_action_payload(action, self.comment, self.require_signature)
            await self.scope.run(self.api.take_file_action(file.id, payload))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Action failed", exc.message or f"Failed to {action.value} file")
            return False
        finally:
            self.processing = False

        # the file stays listed under its new status
        status = FILE_REVIEW_OUTCOMES[action]
        self.files = [
            f.model_copy(update={"status": status}) if f.id == file.id else f
            for f in self.files
        ]
        self.selected = None
        self.comment = ""
        self.require_signature = False

        done = FILE_ACTION_PAST_TENSE[action]
        self.notifier.success(f"File {done} successfully", f"{file.title} has been {done}")
        return True


# ------------------------------------------------------------
# My files: own documents and folders
# ------------------------------------------------------------
class MyFilesView(_FileListView):
    name = "my-files"
    load_error = "Failed to load files"

    def __init__(self, runtime, folder_id: Optional[str] = None):
        super().__init__(runtime)
        self.folder_id = folder_id
        self.folders: list[Folder] = []

    async def load(self) -> None:
        self.folders, self.files = await self.scope.gather(
            self.api.list_folders(parent_id=self.folder_id),
            self.api.list_files(folder_id=self.folder_id),
        )

    async def open_folder(self, folder_id: Optional[str]) -> None:
        self.folder_id = folder_id
        self.selected = None
        await self.refresh()

    async def create_folder(
        self,
        name: str,
        description: str = "",
        access_level: FolderAccessLevel = FolderAccessLevel.Department,
        departments: tuple[str, ...] = (),
    ) -> bool:
        if not name.strip():
            self.notifier.error("Validation Error", "Folder name is required")
            return False

        body = {
            "name": name.strip(),
            "description": description,
            "accessLevel": FolderAccessLevel(access_level).value,
            "departments": list(departments),
        }
        if self.folder_id:
            body["parentFolder"] = self.folder_id

        self.processing = True
        try:
            await self.scope.run(self.api.create_folder(body))
        except ScopeClosed:
            return False
        except ApiError as exc:
            self.notifier.error("Error", exc.message or "Failed to create folder")
            return False
        finally:
            self.processing = False

        self.notifier.success("Success", "Folder created successfully")
        await self.refresh()
        return True


class SharedFilesView(_FileListView):
    name = "shared-files"
    load_error = "Failed to load shared files"

    async def load(self) -> None:
        self.files = await self.api.list_shared_files()
