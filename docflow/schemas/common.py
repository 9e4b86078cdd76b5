from typing import Any, Optional
from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel


def ref_id(value: Any) -> Optional[str]:
    """A reference may arrive as a bare id or as an embedded document."""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        found = value.get("_id") or value.get("id")
        return str(found) if found is not None else None
    return str(value)


def ref_name(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        return value.get("name")
    return None


# ---------------------------------------------------------
# BASE: backend speaks camelCase and Mongo-style "_id"
# ---------------------------------------------------------
class CamelModel(BaseModel):

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "_id" in data and "id" not in data:
            data = {**data, "id": str(data["_id"])}
        return data

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
