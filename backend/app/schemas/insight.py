"""
Insight schemas.
"""
from pydantic import BaseModel
from typing import Optional
import enum


class InsightStatus(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMPLETED = "completed"


class InsightState(BaseModel):
    status: InsightStatus
    text: Optional[str] = None
    is_error: bool = False
