"""
User models for dashboard role management.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """Roles of dashboard staff."""
    POSH_COMMITTEE = "posh_committee"
    LEGAL_ADVISOR = "legal_advisor"
    HR_ADMIN = "hr_admin"
    NGO_COUNSELOR = "ngo_counselor"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class UserCreate(BaseModel):
    """Model for creating a new dashboard user."""
    email: str = Field(..., min_length=3, max_length=254, description="Login email")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    phone: Optional[str] = Field(None, max_length=20, description="Phone number (with country code)")
    role: UserRole = Field(..., description="Dashboard role")
    organization: str = Field(..., min_length=1, max_length=200, description="Office or organisation")
    status: UserStatus = Field(default=UserStatus.ACTIVE)
    casesHandled: int = Field(default=0, ge=0)


class UserUpdate(BaseModel):
    """Partial update; only provided fields are written."""
    email: Optional[str] = Field(None, min_length=3, max_length=254)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    role: Optional[UserRole] = None
    organization: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[UserStatus] = None
    casesHandled: Optional[int] = Field(None, ge=0)


class UserResponse(BaseModel):
    """Model for user responses."""
    id: str = Field(..., description="Firestore document ID")
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    organization: str = ""
    status: str = UserStatus.ACTIVE.value
    casesHandled: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    lastLogin: Optional[datetime] = None
