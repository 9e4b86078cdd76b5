# docflow/views/upload.py

from typing import Optional, Sequence

from docflow.core.errors import ApiError
from docflow.core.formatting import format_file_size
from docflow.schemas.department import Department, Folder
from docflow.schemas.file import File
from docflow.services.scope import ScopeClosed
from docflow.views.base import View

MEGABYTE = 1024 * 1024


class FileUploadView(View):
    name = "file-upload"
    load_error = "Failed to load folders and departments"

    def __init__(self, runtime):
        super().__init__(runtime)
        self.folders: list[Folder] = []
        self.departments: list[Department] = []
        self.uploading = False

    async def load(self) -> None:
        # independent fetches, issued together
        self.folders, self.departments = await self.scope.gather(
            self.api.list_folders(),
            self.api.list_departments(),
        )

    @property
    def max_upload_bytes(self) -> int:
        return self.runtime.preferences.load_app_settings().max_file_size * MEGABYTE

    async def upload(
        self,
        title: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        description: str = "",
        category: Optional[str] = None,
        folder_id: Optional[str] = None,
        departments: Sequence[str] = (),
        requires_signature: bool = False,
    ) -> Optional[File]:
        if not title.strip() or not filename:
            self.notifier.error("Validation Error", "Title and file are required")
            return None

        if len(content) > self.max_upload_bytes:
            self.notifier.error(
                "File too large",
                f"{filename} is {format_file_size(len(content))}; "
                f"the limit is {format_file_size(self.max_upload_bytes)}",
            )
            return None

        fields = {
            "title": title.strip(),
            "description": description,
            "requiresSignature": str(requires_signature).lower(),
        }
        if category:
            fields["category"] = category
        if folder_id:
            fields["folderId"] = folder_id
        if departments:
            fields["departments"] = ",".join(departments)

        self.uploading = True
        try:
            file = await self.scope.run(self.api.upload_file(fields, filename, content, content_type))
        except ScopeClosed:
            return None
        except ApiError as exc:
            self.notifier.error("Upload failed", exc.message or "Upload failed")
            return None
        finally:
            self.uploading = False

        self.notifier.success(
            "File uploaded successfully",
            f"{filename} ({format_file_size(len(content))}) has been uploaded",
        )
        return file
