import uuid
from sqlalchemy import Column, String, DateTime, JSON, Uuid
from datetime import datetime
from enrollhub.core.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    university = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    # No foreign key: deleting a course leaves its students in place
    course_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    selected_sessions = Column(JSON, nullable=False, default=list)  # snapshot taken at registration
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
