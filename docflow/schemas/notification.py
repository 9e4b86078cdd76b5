from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.schemas.common import CamelModel, ref_id, ref_name


class Notification(CamelModel):
    id: str
    message: str = ""
    action_type: str = ""
    read: bool = False
    file: Optional[str] = None
    file_name: Optional[str] = None
    folder: Optional[str] = None
    folder_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_targets(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "isRead" in data and "read" not in data:
            data["read"] = data["isRead"]
        for key in ("file", "folder"):
            if isinstance(data.get(key), dict):
                data[f"{key}Name"] = data.get(f"{key}Name") or ref_name(data[key])
                data[key] = ref_id(data[key])
        return data
