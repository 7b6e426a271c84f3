"""
Text analysis models: request body and classification result.
"""

from pydantic import BaseModel, Field
from typing import List
from enum import Enum

from nagrik_seva.models.issue import CamelModel


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnalyzeRequest(BaseModel):
    """Free-text complaint to classify."""
    text: str = Field(..., description="Raw complaint text")


class ClassificationResult(CamelModel):
    """
    Department routing and guidance for a complaint.
    Pure function of the input text; not persisted.
    """
    category: str
    department: str
    importance: str
    helpline: str
    actions: List[str] = Field(default_factory=list)
    risk_level: RiskLevel
    advice: str
