# lms_grades/schemas/course.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# ==================== Course Schemas ====================


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_published: bool = False


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


# ==================== Course Enrollment Schemas ====================


class CourseEnrollmentCreate(BaseModel):
    """Schema for enrolling a user in a course"""

    user_id: int = Field(..., description="Resolved id of the enrolling user")
    progress: int = Field(default=0, ge=0, le=100)


class CourseEnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    progress: int
    started_at: datetime
    last_accessed_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
