from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Any, List, Optional

from enrollhub.schemas.course import CourseSummary, SessionOut


class StudentOut(BaseModel):
    id: UUID
    name: str
    email: str
    university: str
    phone_number: str = Field(alias="phoneNumber")
    course_id: UUID = Field(alias="courseId")
    course: Optional[CourseSummary] = None  # None when the course was deleted
    selected_sessions: List[SessionOut] = Field(default_factory=list, alias="selectedSessions")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class StudentIn(BaseModel):
    name: Optional[Any] = None
    email: Optional[Any] = None
    university: Optional[Any] = None
    phone_number: Optional[Any] = Field(default=None, alias="phoneNumber")
    course_id: Optional[Any] = Field(default=None, alias="courseId")
    selected_sessions: Optional[Any] = Field(default=None, alias="selectedSessions")

    class Config:
        populate_by_name = True

    def supplied(self) -> dict:
        return self.model_dump(exclude_unset=True)
