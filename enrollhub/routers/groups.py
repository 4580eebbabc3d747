import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from enrollhub.core.config import Settings, get_settings
from enrollhub.core.errors import EnrollHubError
from enrollhub.core.security import require_admin
from enrollhub.schemas.envelope import success
from enrollhub.schemas.group import AddParticipantsRequest
from enrollhub.services import group_service
from enrollhub.services.validation import validate_participants

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/groups", dependencies=[Depends(require_admin)])
def list_groups(settings: Settings = Depends(get_settings)):
    """Proxy the provider's group list so the API key never leaves the server."""
    try:
        return success(group_service.list_groups(settings))
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[groups] LIST ERROR")
        raise HTTPException(status_code=500, detail=str(e) or "Failed to fetch groups")


@router.post("/groups/{chat_id}/participants/add", dependencies=[Depends(require_admin)])
def add_participant(chat_id: str, request: AddParticipantsRequest, settings: Settings = Depends(get_settings)):
    """
    Add a participant to a group, falling back to an invite link.

    Answers 200 for both a direct add and the invite-link fallback (check
    ``method``), and 500 when neither worked.
    """
    participant_id = validate_participants(request.participants)
    participants = [{"id": participant_id}]
    logger.info(f"[groups] Processing request: group {chat_id}, participant {participant_id}")
    try:
        result = group_service.invite_participant(
            settings, chat_id, participants, request.student_name, request.course_name
        )
    except EnrollHubError:
        raise
    except Exception as e:
        logger.exception("[groups] ADD PARTICIPANT ERROR")
        raise HTTPException(status_code=500, detail=str(e))
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.to_response()))
