"""
Request/response models for severity analysis and hotspot snapshots.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional


class SeverityRequest(BaseModel):
    description: str = Field(..., description="Incident description to classify")
    case_id: Optional[str] = Field(None, description="Case whose description should be replaced")
    case_ids: Optional[List[str]] = Field(None, description="Cases to update in one batch")
    update_database: bool = Field(False, description="Write the elaborated description back to the case(s)")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Description is required and must be a non-empty string")
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "description": "A colleague keeps sending me messages after I asked him to stop.",
                "case_id": "case_123",
                "update_database": False,
            }
        }


class SeverityResponse(BaseModel):
    priority: str
    score: int
    explanation: str = ""
    original_description: str
    elaborated_description: str
    model_name: str = ""
    fallback_used: bool = False
    updated: bool = False
    updated_count: int = 0
    updated_ids: Optional[List[str]] = None
    update_error: Optional[str] = None


class SeverityIndexRequest(BaseModel):
    description: str = Field(..., min_length=1)


class SeverityServiceStatus(BaseModel):
    status: str
    gemini_configured: bool
    db_configured: bool
    timestamp: datetime


class LatLng(BaseModel):
    lat: float
    lng: float


class HotspotSnapshot(BaseModel):
    panicAvg: Optional[LatLng] = None
    casesAvg: Optional[LatLng] = None
    lastUpdated: Optional[datetime] = None
    timestamp: Optional[str] = None


class HotspotRecomputeRequest(BaseModel):
    panic_radius: Optional[float] = Field(None, gt=0, description="Meters; defaults to PANIC_HOTSPOT_RADIUS_METERS")
    case_radius: Optional[float] = Field(None, gt=0, description="Meters; defaults to CASE_HOTSPOT_RADIUS_METERS")


class HotspotRecomputeResponse(BaseModel):
    panic_avg: Optional[LatLng] = None
    cases_avg: Optional[LatLng] = None
    panic_count: int
    case_count: int
    timestamp: str
