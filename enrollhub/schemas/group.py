from pydantic import BaseModel, Field
from typing import Any, Optional


class GroupOut(BaseModel):
    chat_id: str = Field(alias="chatId")
    name: str
    subject: Optional[str] = None
    participants_count: int = Field(default=0, alias="participantsCount")

    class Config:
        populate_by_name = True


class AddParticipantsRequest(BaseModel):
    participants: Optional[Any] = None
    student_name: Optional[str] = Field(default=None, alias="studentName")
    course_name: Optional[str] = Field(default=None, alias="courseName")

    class Config:
        populate_by_name = True


class JoinRequest(BaseModel):
    course_id: Optional[Any] = Field(default=None, alias="courseId")
    student_name: Optional[Any] = Field(default=None, alias="studentName")
    whatsapp_number: Optional[Any] = Field(default=None, alias="whatsappNumber")

    class Config:
        populate_by_name = True
