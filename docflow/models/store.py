# docflow/models/store.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, String, Text
from datetime import datetime, timezone


class StoredItem(SQLModel, table=True):
    """One key of the script-accessible client store."""

    __tablename__ = "local_storage"

    key: str = Field(
        sa_column=Column(String(128), primary_key=True)
    )

    value: str = Field(
        sa_column=Column(Text, nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
