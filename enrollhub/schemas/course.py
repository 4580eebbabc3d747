from pydantic import BaseModel, Field
from uuid import UUID
from datetime import datetime
from typing import Any, List, Optional


class SessionOut(BaseModel):
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")

    class Config:
        populate_by_name = True


class CourseOut(BaseModel):
    id: UUID
    course_name: str = Field(alias="courseName")
    kind: str
    sessions: Optional[List[SessionOut]] = None
    chat_id: Optional[str] = Field(default=None, alias="chatId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class CourseSummary(BaseModel):
    """Course fields joined onto a student listing."""
    id: UUID
    course_name: str = Field(alias="courseName")
    kind: str
    sessions: Optional[List[SessionOut]] = None
    chat_id: Optional[str] = Field(default=None, alias="chatId")

    class Config:
        from_attributes = True
        populate_by_name = True


class CourseIn(BaseModel):
    # Loosely typed: services.validation owns the error messages
    course_name: Optional[Any] = Field(default=None, alias="courseName")
    sessions: Optional[Any] = None
    chat_id: Optional[Any] = Field(default=None, alias="chatId")

    class Config:
        populate_by_name = True

    def supplied(self) -> dict:
        """Only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)
