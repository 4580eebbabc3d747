import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from enrollhub.core.config import Settings, get_settings
from enrollhub.core.database import get_db
from enrollhub.core.errors import EnrollHubError, ValidationError
from enrollhub.models.course import CourseKind
from enrollhub.schemas.group import JoinRequest
from enrollhub.services import course_service, group_service
from enrollhub.services.validation import require_text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/join")
def join_group_course(
    request: JoinRequest, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
):
    """
    Public self-service join: a student picks a group-linked course and gives
    a WhatsApp number; the number is turned into a chat id and run through the
    invitation flow.

    Example payload:
        {"courseId": "<uuid>", "studentName": "Amina", "whatsappNumber": "612345678"}
    """
    course_id = require_text(request.course_id, "Course is required")
    student_name = require_text(request.student_name, "Name is required")
    number = require_text(request.whatsapp_number, "WhatsApp number is required")

    course = course_service.get_course(db, course_id)
    if course.kind != CourseKind.group.value or not course.chat_id:
        raise ValidationError("This course is not linked to a group")

    if "@" not in number and not any(ch.isdigit() for ch in number):
        raise ValidationError("WhatsApp number must contain digits")
    participant_id = group_service.format_participant_id(number, settings.whatsapp_country_code)

    logger.info(f"[join] {student_name} joining {course.course_name} as {participant_id}")
    try:
        result = group_service.invite_participant(
            settings, course.chat_id, [{"id": participant_id}], student_name, course.course_name
        )
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[join] JOIN ERROR")
        raise HTTPException(status_code=500, detail=str(e))
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.to_response()))
