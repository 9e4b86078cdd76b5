from datetime import datetime
from typing import Any, Optional
from pydantic import model_validator

from docflow.models.enums import Role, SignatureType
from docflow.schemas.common import CamelModel, ref_id, ref_name


class Signature(CamelModel):
    enabled: bool = False
    type: Optional[SignatureType] = None
    data: Optional[str] = None
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------
# READ USER (response)
# ---------------------------------------------------------
class User(CamelModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str
    role: Role
    department: Optional[str] = None
    department_name: Optional[str] = None
    position: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    signature: Optional[Signature] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_department(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("department"), dict):
            dept = data["department"]
            data = {
                **data,
                "department": ref_id(dept),
                "departmentName": data.get("departmentName") or ref_name(dept),
            }
        return data

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_department(self) -> bool:
        return bool(self.department)


# ---------------------------------------------------------
# CREATE USER (Admin creates any user)
# ---------------------------------------------------------
class UserCreate(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    role: Role = Role.Department
    department: Optional[str] = None
    position: Optional[str] = None


# ---------------------------------------------------------
# UPDATE USER (Admin edits)
# ---------------------------------------------------------
class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    department: Optional[str] = None
    position: Optional[str] = None
    is_active: Optional[bool] = None
