from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.models.enums import FolderAccessLevel
from docflow.schemas.common import CamelModel, ref_id


class Department(CamelModel):
    id: str
    name: str
    code: str = ""
    description: str = ""
    is_active: bool = True
    director: Optional[str] = None
    director_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_director(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("director"), dict):
            director = data["director"]
            name = f"{director.get('firstName', '')} {director.get('lastName', '')}".strip()
            data = {
                **data,
                "director": ref_id(director),
                "directorName": data.get("directorName") or name or None,
            }
        return data

    @property
    def has_director(self) -> bool:
        return bool(self.director)


class DepartmentCreate(CamelModel):
    name: str
    code: str
    description: str = ""
    is_active: bool = True


class DepartmentUpdate(CamelModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class Folder(CamelModel):
    id: str
    name: str
    description: str = ""
    access_level: Optional[FolderAccessLevel] = None
    departments: list[str] = []
    parent_folder_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_departments(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("departments"):
            data = {**data, "departments": [ref_id(d) for d in data["departments"] if ref_id(d)]}
        return data
