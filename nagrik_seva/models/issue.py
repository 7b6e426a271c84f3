"""
Pydantic models for civic issues.
These models handle validation for issue submission and responses.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Optional, List
from enum import Enum


class IssueStatus(str, Enum):
    """
    Fixed status lifecycle, in order:
    Reported → Forwarded → In Progress → Resolved
    """
    REPORTED = "Reported"          # Initial state
    FORWARDED = "Forwarded"        # Sent to the responsible department
    IN_PROGRESS = "In Progress"    # Department is working on it
    RESOLVED = "Resolved"          # Fixed; unresolved-day counter frozen


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class IssueUpdate(CamelModel):
    """One entry of an issue's status history."""
    status: IssueStatus = Field(..., description="Status the issue moved to")
    date: datetime = Field(..., description="When the change occurred")
    note: Optional[str] = Field(None, description="Optional note explaining the change")

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """Naive dates are taken as UTC so history entries stay comparable."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class IssueCreate(CamelModel):
    """
    Model for creating a new issue (incoming POST request).
    Optional fields are default-filled by the store.
    """
    description: str = Field(..., min_length=1, description="What the citizen observed")
    category: str = Field(..., min_length=1, description="Waste, Water, Air, Transport, Energy, ...")
    location: str = Field(..., min_length=1, description="Where the issue is")
    status: IssueStatus = Field(default=IssueStatus.REPORTED, description="Initial status")
    affected_count: int = Field(default=1, ge=1, description="Number of citizens affected")
    user_id: Optional[str] = Field(None, description="Reporter identifier (optional)")
    lat: Optional[float] = Field(None, ge=-90, le=90, description="Latitude coordinate")
    lng: Optional[float] = Field(None, ge=-180, le=180, description="Longitude coordinate")

    class Config:
        json_schema_extra = {
            "example": {
                "description": "Garbage near park",
                "category": "Waste",
                "location": "Park Rd",
                "affectedCount": 4,
            }
        }
        extra = "ignore"


class Issue(CamelModel):
    """
    Stored issue record (what the API returns).
    Includes system-generated fields like ID, timestamps and update history.
    """
    id: int = Field(..., ge=1, description="Store-assigned issue ID")
    description: str
    category: str
    location: str
    status: IssueStatus = Field(default=IssueStatus.REPORTED)
    affected_count: int = Field(default=1, ge=1)
    days_unresolved: int = Field(default=0, ge=0, description="Simulated days without resolution")
    created_at: datetime
    resolved_at: Optional[datetime] = Field(None, description="Set on the first transition to Resolved")
    updates: List[IssueUpdate] = Field(default_factory=list, description="Append-only status history")
    user_id: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class SimulateDaysRequest(CamelModel):
    """Request to advance the simulated clock for all open issues."""
    days: int = Field(..., ge=0, description="Number of days to add")


class SimulateDaysResponse(BaseModel):
    message: str
