"""
Project Pydantic schemas for API validation.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List
from atelier.models.project import ProjectStatus


class ProjectBase(BaseModel):
    """Base project schema."""
    display_id: str = Field(..., min_length=3, max_length=3)
    name: str = Field(..., min_length=5, max_length=255)
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    main_client_id: Optional[str] = None
    secondary_client_ids: List[str] = []
    location: Optional[str] = None
    status: ProjectStatus = ProjectStatus.proposal

    @field_validator("display_id")
    @classmethod
    def upper_display_id(cls, value: str) -> str:
        return value.upper()


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""
    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project."""
    display_id: Optional[str] = Field(None, min_length=3, max_length=3)
    name: Optional[str] = Field(None, min_length=5, max_length=255)
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    main_client_id: Optional[str] = None
    secondary_client_ids: Optional[List[str]] = None
    location: Optional[str] = None
    status: Optional[ProjectStatus] = None

    @field_validator("display_id")
    @classmethod
    def upper_display_id(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value is not None else value


class ProjectResponse(ProjectBase):
    """Schema for project response."""
    id: str
    label: str
    created_at: datetime

    class Config:
        from_attributes = True


class ProjectList(BaseModel):
    """Schema for listing projects."""
    items: list[ProjectResponse]
    total: int
