import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from enrollhub.core.database import get_db
from enrollhub.core.errors import EnrollHubError
from enrollhub.core.security import require_admin
from enrollhub.schemas.course import CourseIn
from enrollhub.schemas.envelope import success
from enrollhub.services import course_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/courses")
def list_courses(db: Session = Depends(get_db)):
    try:
        return success(course_service.list_courses(db))
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[courses] LIST ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/courses", status_code=201)
def create_course(request: CourseIn, db: Session = Depends(get_db), _admin: str = Depends(require_admin)):
    """
    Create a course. Body is either ``{courseName, sessions: [{startTime, endTime}]}``
    or ``{courseName, chatId}``; the shape decides the course kind.
    """
    try:
        return success(course_service.create_course(db, request.supplied()), status_code=201)
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[courses] CREATE ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/courses/{course_id}")
def update_course(
    course_id: str, request: CourseIn, db: Session = Depends(get_db), _admin: str = Depends(require_admin)
):
    # Only the fields present in the body are changed
    try:
        return success(course_service.update_course(db, course_id, request.supplied()))
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[courses] UPDATE ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/courses/{course_id}")
def delete_course(course_id: str, db: Session = Depends(get_db), _admin: str = Depends(require_admin)):
    try:
        course_service.delete_course(db, course_id)
        return success(message="Course deleted successfully")
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[courses] DELETE ERROR")
        raise HTTPException(status_code=500, detail=str(e))
