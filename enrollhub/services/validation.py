"""
Payload validation for courses, students and participant requests.

Every function here is pure: it takes the fields supplied by a request (keyed
by the snake_case schema names) and either returns cleaned values or raises
``ValidationError`` carrying the message of the first rule that failed.
Nothing is aggregated, so the order of checks decides which message a caller
sees.
"""
import re
from typing import Any, Dict, List, Optional

from enrollhub.core.errors import ValidationError
from enrollhub.models.course import CourseKind

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

INVALID_EMAIL = "Please enter a valid email address"
SESSION_TIMES_REQUIRED = "Each session must have startTime and endTime"
NO_FIELDS = "At least one field is required"


def require_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message)
    return value.strip()


def validate_email(value: Any) -> str:
    email = require_text(value, "Email is required")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(INVALID_EMAIL)
    return email.lower()


def validate_sessions(value: Any, empty_message: str) -> List[Dict[str, str]]:
    """Check a session list and return it as plain dicts, times untouched."""
    if not isinstance(value, list) or len(value) == 0:
        raise ValidationError(empty_message)
    sessions = []
    for session in value:
        if not isinstance(session, dict):
            raise ValidationError(SESSION_TIMES_REQUIRED)
        start, end = session.get("startTime"), session.get("endTime")
        if not isinstance(start, str) or not start or not isinstance(end, str) or not end:
            raise ValidationError(SESSION_TIMES_REQUIRED)
        sessions.append({"startTime": start, "endTime": end})
    return sessions


def validate_sessions_offered(selected: List[Dict[str, str]], offered: Optional[List[Dict[str, str]]]) -> None:
    """Every selected session must be one of the course's sessions, compared verbatim."""
    available = {(s.get("startTime"), s.get("endTime")) for s in offered or []}
    for session in selected:
        if (session.get("startTime"), session.get("endTime")) not in available:
            raise ValidationError(
                f"Session {session.get('startTime')}-{session.get('endTime')} is not offered by the selected course"
            )


def validate_course_id(value: Any) -> str:
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise ValidationError("Course is required")
    return str(value)


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------

def validate_course_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    course_name = require_text(payload.get("course_name"), "Course name is required")
    has_sessions = payload.get("sessions") is not None
    has_chat_id = payload.get("chat_id") is not None

    if has_sessions and has_chat_id:
        raise ValidationError("A course has either sessions or a chat ID, not both")
    if has_chat_id:
        chat_id = require_text(payload["chat_id"], "Chat ID is required")
        return {"course_name": course_name, "kind": CourseKind.group.value, "chat_id": chat_id, "sessions": None}

    sessions = validate_sessions(payload.get("sessions"), "At least one session is required")
    return {"course_name": course_name, "kind": CourseKind.sessions.value, "sessions": sessions, "chat_id": None}


def validate_course_update(payload: Dict[str, Any], kind: str) -> Dict[str, Any]:
    if not payload:
        raise ValidationError(NO_FIELDS)

    changes: Dict[str, Any] = {}
    if "course_name" in payload:
        changes["course_name"] = require_text(payload["course_name"], "Course name is required")
    if "sessions" in payload:
        if kind != CourseKind.sessions.value:
            raise ValidationError("Group-linked courses do not have sessions")
        changes["sessions"] = validate_sessions(payload["sessions"], "At least one session is required")
    if "chat_id" in payload:
        if kind != CourseKind.group.value:
            raise ValidationError("Session-based courses do not have a chat ID")
        changes["chat_id"] = require_text(payload["chat_id"], "Chat ID is required")
    return changes


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------

STUDENT_TEXT_FIELDS = (
    ("name", "Name is required"),
    ("university", "University is required"),
    ("phone_number", "Phone number is required"),
)


def validate_student_create(payload: Dict[str, Any]) -> Dict[str, Any]:
    name = require_text(payload.get("name"), "Name is required")
    email = require_text(payload.get("email"), "Email is required")
    university = require_text(payload.get("university"), "University is required")
    phone_number = require_text(payload.get("phone_number"), "Phone number is required")
    course_id = validate_course_id(payload.get("course_id"))
    selected_sessions = validate_sessions(payload.get("selected_sessions"), "At least one session must be selected")
    return {
        "name": name,
        "email": validate_email(email),
        "university": university,
        "phone_number": phone_number,
        "course_id": course_id,
        "selected_sessions": selected_sessions,
    }


def validate_student_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    if not payload:
        raise ValidationError(NO_FIELDS)

    changes: Dict[str, Any] = {}
    for field, message in STUDENT_TEXT_FIELDS:
        if field in payload:
            changes[field] = require_text(payload[field], message)
    if "email" in payload:
        changes["email"] = validate_email(payload["email"])
    if "course_id" in payload:
        changes["course_id"] = validate_course_id(payload["course_id"])
    if "selected_sessions" in payload:
        changes["selected_sessions"] = validate_sessions(
            payload["selected_sessions"], "At least one session must be selected"
        )
    return changes


# ---------------------------------------------------------------------------
# Group participants
# ---------------------------------------------------------------------------

def validate_participants(value: Any) -> str:
    """Return the id of the first participant; the rest are ignored downstream."""
    if not isinstance(value, list) or len(value) == 0:
        raise ValidationError("Participants array is required")
    first: Optional[Any] = value[0]
    participant_id = first.get("id") if isinstance(first, dict) else None
    return require_text(participant_id, "Each participant must have an id")
