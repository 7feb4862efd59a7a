"""
Pydantic models for harassment cases, case notes and evidence.

Field names follow the documents the mobile app and the dashboard already
share in Firestore (camelCase).
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from enum import Enum


class CaseStatus(str, Enum):
    PENDING = "pending"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class CasePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class AccessLevel(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    RESTRICTED = "restricted"
    CONFIDENTIAL = "confidential"


class CaseCreate(BaseModel):
    """Case opened from the dashboard."""
    caseNumber: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=10000)
    status: CaseStatus = CaseStatus.PENDING
    priority: CasePriority = CasePriority.MEDIUM
    isAnonymous: bool = False
    reporterId: Optional[str] = None
    assignedTo: Optional[str] = None
    location: str = Field("", max_length=500)
    incidentDate: Optional[datetime] = None


class CaseUpdate(BaseModel):
    """Partial case update; only provided fields are written."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=10000)
    status: Optional[CaseStatus] = None
    priority: Optional[CasePriority] = None
    assignedTo: Optional[str] = None
    location: Optional[str] = Field(None, max_length=500)
    lastUpdate: Optional[str] = Field(None, max_length=500)
    resolvedAt: Optional[datetime] = None


class CaseResponse(BaseModel):
    """
    Case as returned to the dashboard.

    Cases filed from the mobile app carry extra fields (attachments,
    GeoPoints); those are passed through untouched.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    caseNumber: Optional[str] = None
    title: Optional[str] = None
    description: str = ""
    status: str = ""
    priority: str = ""
    isAnonymous: bool = False
    assignedTo: Optional[str] = None
    panicScore: Optional[float] = None
    submittedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class CaseStats(BaseModel):
    total: int = 0
    pending: int = 0
    investigating: int = 0
    resolved: int = 0
    urgent: int = 0


class CaseNoteCreate(BaseModel):
    userId: str = Field(..., min_length=1)
    note: str = Field(..., min_length=1, max_length=5000)
    isInternal: bool = True


class EvidenceCreate(BaseModel):
    """Evidence metadata. The file itself lives in object storage."""
    caseId: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, max_length=255)
    fileType: str = Field(..., min_length=1, max_length=100)
    fileSize: int = Field(..., ge=0)
    filePath: str = Field(..., min_length=1, max_length=1000)
    description: str = Field("", max_length=2000)
    isEncrypted: bool = True
    accessLevel: AccessLevel = AccessLevel.RESTRICTED
    uploadedBy: Optional[str] = None


class DashboardStats(BaseModel):
    total_cases: int = 0
    urgent_cases: int = 0
    active_users: int = 0
    resolution_rate: int = 0