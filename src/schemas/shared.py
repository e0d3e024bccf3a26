"""Shared schemas for API responses."""

from typing import Optional
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Standard message response."""

    message: str = Field(..., description="Response message")
    success: bool = Field(default=True, description="Operation success status")
    data: Optional[dict] = Field(default=None, description="Additional response data")


class StatusResponse(BaseModel):
    """Status check response."""

    status: str = Field(..., description="Service status")
    version: Optional[str] = Field(default=None, description="API version")
    timestamp: Optional[str] = Field(default=None, description="Response timestamp")
