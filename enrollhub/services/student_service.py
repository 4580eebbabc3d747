import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from enrollhub.core.errors import ConflictError, NotFoundError, ValidationError
from enrollhub.models.course import Course, CourseKind
from enrollhub.models.student import Student
from enrollhub.schemas.course import CourseSummary
from enrollhub.schemas.student import StudentOut
from enrollhub.services.course_service import parse_id
from enrollhub.services.validation import (
    validate_sessions_offered,
    validate_student_create,
    validate_student_update,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "A student with this email already exists"


def student_to_dict(student: Student, course: Course = None) -> Dict:
    out = StudentOut.model_validate(student)
    out.course = CourseSummary.model_validate(course) if course is not None else None
    return out.model_dump(by_alias=True, mode="json")


def _existing_course(db: Session, raw_course_id) -> Course:
    course_id = parse_id(raw_course_id)
    course = db.get(Course, course_id) if course_id else None
    if course is None:
        raise ValidationError("Selected course does not exist")
    if course.kind != CourseKind.sessions.value:
        raise ValidationError("Selected course has no sessions")
    return course


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL)


def get_student(db: Session, student_id: str) -> Student:
    parsed = parse_id(student_id)
    student = db.get(Student, parsed) if parsed else None
    if student is None:
        raise NotFoundError("Student not found")
    return student


def list_students(db: Session) -> List[Dict]:
    rows = (
        db.query(Student, Course)
        .outerjoin(Course, Student.course_id == Course.id)
        .order_by(Student.created_at.desc(), Student.id.desc())
        .all()
    )
    return [student_to_dict(student, course) for student, course in rows]


def create_student(db: Session, payload: Dict) -> Dict:
    fields = validate_student_create(payload)
    course = _existing_course(db, fields["course_id"])
    validate_sessions_offered(fields["selected_sessions"], course.sessions)
    fields["course_id"] = course.id

    student = Student(**fields)
    db.add(student)
    _commit_unique(db)
    db.refresh(student)
    logger.info(f"[students] Registered student {student.id} for course {student.course_id}")
    return student_to_dict(student, course)


def update_student(db: Session, student_id: str, payload: Dict) -> Dict:
    student = get_student(db, student_id)
    changes = validate_student_update(payload)
    if "course_id" in changes or "selected_sessions" in changes:
        # The stored snapshot must still match when the course or the sessions change
        course = _existing_course(db, changes.get("course_id", student.course_id))
        validate_sessions_offered(changes.get("selected_sessions", student.selected_sessions), course.sessions)
        if "course_id" in changes:
            changes["course_id"] = course.id

    for field, value in changes.items():
        setattr(student, field, value)
    _commit_unique(db)
    db.refresh(student)
    logger.info(f"[students] Updated student {student.id}: {sorted(changes)}")
    return student_to_dict(student, db.get(Course, student.course_id))


def delete_student(db: Session, student_id: str) -> None:
    student = get_student(db, student_id)
    db.delete(student)
    db.commit()
    logger.info(f"[students] Deleted student {student_id}")
