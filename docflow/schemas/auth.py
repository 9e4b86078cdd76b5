from typing import Optional
from pydantic import BaseModel

from docflow.models.enums import Role
from docflow.schemas.user import User


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: str
    password: str


# -------------------------------------------------------------------
# SESSION (token + current user snapshot)
# -------------------------------------------------------------------
class Session(BaseModel):
    token: str
    user: User

    @property
    def role(self) -> Optional[Role]:
        return self.user.role
