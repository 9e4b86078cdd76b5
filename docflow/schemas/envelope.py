from typing import Any, Optional
from pydantic import BaseModel


# ---------------------------------------------------------
# Uniform response envelope for every fetcher/mutator
# ---------------------------------------------------------
class ApiResponse(BaseModel):
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None

    def pick(self, key: str, default: Any = None) -> Any:
        """Read a key out of the data payload, tolerating a missing payload."""
        if isinstance(self.data, dict):
            value = self.data.get(key)
            return default if value is None else value
        return default
