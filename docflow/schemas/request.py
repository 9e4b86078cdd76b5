from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.models.enums import Priority, RequestAction, RequestStatus
from docflow.schemas.common import CamelModel, ref_id


class RequestAttachment(CamelModel):
    name: str = ""
    size: int = 0
    type: str = ""


class RequestAuthor(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""


# ---------------------------------------------------------
# REQUEST (inbox item routed to a department / director)
# ---------------------------------------------------------
class Request(CamelModel):
    id: str
    title: str
    description: str = ""
    target_department: Optional[str] = None
    assigned_director: Optional[str] = None
    priority: Priority = Priority.Medium
    category: Optional[str] = None
    status: RequestStatus = RequestStatus.Pending
    created_by: Optional[RequestAuthor] = None
    attachments: list[RequestAttachment] = []
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_refs(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            for key in ("targetDepartment", "assignedDirector"):
                if key in data:
                    data[key] = ref_id(data[key])
        return data


class RequestCreate(CamelModel):
    title: str
    description: str = ""
    target_department: str
    assigned_director: Optional[str] = None
    priority: Priority = Priority.Medium
    category: Optional[str] = None


class RequestActionPayload(CamelModel):
    action: RequestAction
    comment: str = ""
    require_signature: bool = False
