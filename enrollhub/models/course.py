import uuid
from sqlalchemy import Column, String, DateTime, JSON, Uuid
from datetime import datetime
from enum import Enum as PyEnum
from enrollhub.core.database import Base


class CourseKind(str, PyEnum):
    sessions = "sessions"
    group = "group"


class Course(Base):
    __tablename__ = "courses"
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, nullable=False)
    course_name = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    sessions = Column(JSON, nullable=True)  # [{"startTime": "8:00", "endTime": "9:00"}], kept verbatim
    chat_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
