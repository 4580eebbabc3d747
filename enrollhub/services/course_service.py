import logging
import uuid
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from enrollhub.core.errors import NotFoundError
from enrollhub.models.course import Course
from enrollhub.schemas.course import CourseOut
from enrollhub.services.validation import validate_course_create, validate_course_update

logger = logging.getLogger(__name__)


def parse_id(raw: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw))
    except (ValueError, TypeError):
        return None


def get_course(db: Session, course_id) -> Course:
    parsed = parse_id(course_id)
    course = db.get(Course, parsed) if parsed else None
    if course is None:
        raise NotFoundError("Course not found")
    return course


def course_to_dict(course: Course) -> Dict:
    return CourseOut.model_validate(course).model_dump(by_alias=True, mode="json")


def list_courses(db: Session) -> List[Dict]:
    courses = db.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).all()
    return [course_to_dict(c) for c in courses]


def create_course(db: Session, payload: Dict) -> Dict:
    fields = validate_course_create(payload)
    course = Course(**fields)
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info(f"[courses] Created {course.kind} course {course.id} ({course.course_name})")
    return course_to_dict(course)


def update_course(db: Session, course_id: str, payload: Dict) -> Dict:
    course = get_course(db, course_id)
    changes = validate_course_update(payload, course.kind)
    for field, value in changes.items():
        setattr(course, field, value)
    db.commit()
    db.refresh(course)
    logger.info(f"[courses] Updated course {course.id}: {sorted(changes)}")
    return course_to_dict(course)


def delete_course(db: Session, course_id: str) -> None:
    # Students referencing the course are left as they are
    course = get_course(db, course_id)
    db.delete(course)
    db.commit()
    logger.info(f"[courses] Deleted course {course_id}")
