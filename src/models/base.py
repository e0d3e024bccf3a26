"""Base model fields shared by all tables."""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class BaseModel(SQLModel):
    """Timestamp and audit columns for every table."""

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False
    )
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_by: Optional[int] = Field(default=None)
    updated_by: Optional[int] = Field(default=None)

    def touch(self, updated_by: Optional[int] = None) -> None:
        """Stamp the row as modified now."""
        self.updated_at = utc_now()
        if updated_by:
            self.updated_by = updated_by
