"""
Area overview models for the civic health dashboard.
"""

from pydantic import Field
from typing import Dict, List

from nagrik_seva.models.issue import CamelModel


class AreaHealth(CamelModel):
    """Unresolved load for one location."""
    location: str
    unresolved: int = Field(default=0, ge=0)
    max_days_unresolved: int = Field(default=0, ge=0)
    health: str = Field(default="green", description="green, yellow or red")


class AreaOverview(CamelModel):
    """Dashboard statistics over all issues."""
    total: int = 0
    reported: int = 0
    in_progress: int = Field(default=0, description="Forwarded + In Progress")
    resolved: int = 0
    categories: Dict[str, int] = Field(default_factory=dict)
    areas: List[AreaHealth] = Field(default_factory=list)
