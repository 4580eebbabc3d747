import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from enrollhub.core.database import get_db
from enrollhub.core.errors import EnrollHubError
from enrollhub.core.security import require_admin
from enrollhub.schemas.envelope import success
from enrollhub.schemas.student import StudentIn
from enrollhub.services import student_service

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/students")
def list_students(db: Session = Depends(get_db)):
    """All students, newest first, each joined with its course (``null`` once the course is deleted)."""
    try:
        return success(student_service.list_students(db))
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[students] LIST ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/students", status_code=201)
def create_student(request: StudentIn, db: Session = Depends(get_db)):
    try:
        return success(student_service.create_student(db, request.supplied()), status_code=201)
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[students] CREATE ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/students/{student_id}")
def update_student(student_id: str, request: StudentIn, db: Session = Depends(get_db)):
    try:
        return success(student_service.update_student(db, student_id, request.supplied()))
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[students] UPDATE ERROR")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/students/{student_id}")
def delete_student(student_id: str, db: Session = Depends(get_db)):
    try:
        student_service.delete_student(db, student_id)
        return success(message="Student deleted successfully")
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[students] DELETE ERROR")
        raise HTTPException(status_code=500, detail=str(e))
