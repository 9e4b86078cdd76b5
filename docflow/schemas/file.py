from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.models.enums import FileAction, FileStatus, SharePermission
from docflow.schemas.common import CamelModel, ref_id


class Attachment(CamelModel):
    name: str = ""
    url: Optional[str] = None
    size: int = 0


class ShareEntry(CamelModel):
    user: Optional[str] = None
    department: Optional[str] = None
    permission: SharePermission = SharePermission.View
    shared_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_refs(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {**data, "user": ref_id(data.get("user")), "department": ref_id(data.get("department"))}
        return data


# ---------------------------------------------------------
# FILE (document moving through the approval workflow)
# ---------------------------------------------------------
class File(CamelModel):
    id: str
    title: str = ""
    description: str = ""
    category: Optional[str] = None
    status: FileStatus = FileStatus.Draft
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    attachment: Optional[Attachment] = None
    requires_signature: bool = False
    shared_with: list[ShareEntry] = []

    @model_validator(mode="before")
    @classmethod
    def normalize_file(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # older payloads only carry "name"
        if not data.get("title") and data.get("name"):
            data["title"] = data["name"]
        if isinstance(data.get("createdBy"), dict):
            data["createdBy"] = ref_id(data["createdBy"])
        return data


class ShareRequest(CamelModel):
    users: list[str]
    permission: SharePermission = SharePermission.View
    message: str = ""


class FileActionPayload(CamelModel):
    action: FileAction
    comment: str = ""
    requires_signature: bool = False
