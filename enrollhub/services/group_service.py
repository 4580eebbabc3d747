"""
Client for the WhatsApp group-messaging gateway.

Covers the group listing proxy and the participant invitation flow:

    1. try to add the participant directly to the group
    2. if that fails, fetch the group's invite code and build an invite link
    3. hand the link (plus a ready-made message) back so an admin can send it

The gateway answers HTTP 200 even when an add fails, so the outcome of step 1
is read from the response body only. That parsing stays inside
``attempt_direct_add``; callers only see ``AddOutcome``.
"""
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from enrollhub.core.config import Settings
from enrollhub.core.errors import UpstreamError

logger = logging.getLogger(__name__)

INVITE_LINK_PREFIX = "https://chat.whatsapp.com/"
INVITE_CODE_KEYS = ("inviteCode", "code", "data", "link", "invite")

DIRECT_ADD = "direct_add"
MANUAL_INVITE_REQUIRED = "manual_invite_required"
COMPLETE_FAILURE = "complete_failure"

MANUAL_INVITE_NOTE = (
    "The participant could not be added by the messaging API. "
    "Please send the invite link manually to the student."
)

# chat groups listing, keyed by provider endpoint: {endpoint: (fetched_at, groups)}
_groups_cache: Dict[str, tuple] = {}


@dataclass
class AddOutcome:
    success: bool
    body: Any = None
    error: Optional[str] = None


@dataclass
class InviteLinkOutcome:
    link: Optional[str] = None
    error: Optional[str] = None


@dataclass
class InvitationResult:
    method: str
    participant_id: str
    status_code: int = 200
    data: Any = None
    invite_link: Optional[str] = None
    message_to_send: Optional[str] = None
    add_error: Optional[str] = None
    invite_error: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        if self.method == DIRECT_ADD:
            return {
                "success": True,
                "data": self.data,
                "method": DIRECT_ADD,
                "message": "Participant added directly to group",
            }
        if self.method == MANUAL_INVITE_REQUIRED:
            return {
                "success": True,
                "method": MANUAL_INVITE_REQUIRED,
                "inviteLink": self.invite_link,
                "messageToSend": self.message_to_send,
                "participantId": self.participant_id,
                "originalAddError": self.add_error,
                "note": MANUAL_INVITE_NOTE,
                "instructions": f'Send this message to {self.participant_id}: "{self.message_to_send}"',
                "message": (
                    "Participant couldn't be added directly. Invite link was generated. "
                    "Please send it manually to the student using the provided details."
                ),
            }
        return {
            "success": False,
            "method": COMPLETE_FAILURE,
            "inviteLink": None,
            "participantId": self.participant_id,
            "originalAddError": self.add_error,
            "inviteCodeError": self.invite_error,
            "error": "Failed to add participant to the group",
            "message": (
                "Failed to add participant directly and could not get invite link. "
                "Manual intervention required."
            ),
        }


def _require_provider(settings: Settings) -> str:
    if not settings.groups_base_url or not settings.whatsapp_api_key:
        raise UpstreamError("WhatsApp API endpoint or key not configured")
    return settings.groups_base_url


def _headers(settings: Settings, accept: str = "application/json") -> Dict[str, str]:
    return {"accept": accept, "X-Api-Key": settings.whatsapp_api_key}


def _parse_body(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def format_participant_id(number: str, country_code: str) -> str:
    """Turn a local phone number into a gateway chat id, e.g. 252612345678@c.us."""
    if "@" in number:
        return number.strip()
    digits = "".join(ch for ch in number if ch.isdigit())
    return f"{country_code}{digits}@c.us"


# ---------------------------------------------------------------------------
# Group listing
# ---------------------------------------------------------------------------

def _serialized(value: Any) -> Optional[str]:
    return value.get("_serialized") if isinstance(value, dict) else None


def transform_group(group: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    metadata = group.get("groupMetadata") or {}
    chat_id = _serialized(group.get("id")) or _serialized(metadata.get("id"))
    if not chat_id:
        return None
    return {
        "chatId": chat_id,
        "name": group.get("name") or metadata.get("subject") or "Unknown Group",
        "subject": metadata.get("subject") or group.get("name"),
        "participantsCount": len(metadata.get("participants") or []),
    }


def list_groups(settings: Settings) -> List[Dict[str, Any]]:
    _require_provider(settings)
    endpoint = settings.whatsapp_api_endpoint

    cached = _groups_cache.get(endpoint)
    if cached and time.monotonic() - cached[0] < settings.groups_cache_seconds:
        return cached[1]

    logger.info(f"[groups] Fetching groups from {endpoint}")
    try:
        response = requests.get(endpoint, headers=_headers(settings), timeout=settings.whatsapp_timeout)
    except requests.RequestException as e:
        logger.error(f"[groups] Request failed: {e}")
        raise UpstreamError(f"Failed to fetch groups: {e}")
    if not response.ok:
        raise UpstreamError(f"Failed to fetch groups: {response.reason or response.status_code}")

    try:
        payload = response.json()
    except ValueError:
        raise UpstreamError("Failed to fetch groups: invalid JSON from provider")
    if not isinstance(payload, list):
        raise UpstreamError("Failed to fetch groups: unexpected response shape")

    groups = [g for g in (transform_group(item) for item in payload if isinstance(item, dict)) if g]
    _groups_cache[endpoint] = (time.monotonic(), groups)
    logger.info(f"[groups] Cached {len(groups)} groups")
    return groups


def clear_groups_cache() -> None:
    _groups_cache.clear()


# ---------------------------------------------------------------------------
# Invitation flow
# ---------------------------------------------------------------------------

def interpret_add_response(body: Any, participant_id: str) -> AddOutcome:
    """Decide from the response body whether the participant was added."""
    if isinstance(body, list):
        # An array carries none of the keyed indicators
        return AddOutcome(False, body, "No success code in response body")
    if isinstance(body, dict):
        nested = body.get(participant_id)
        if nested:
            if isinstance(nested, dict) and nested.get("code") == 200:
                return AddOutcome(True, body)
            code = nested.get("code") if isinstance(nested, dict) else None
            message = nested.get("message") if isinstance(nested, dict) else None
            return AddOutcome(False, body, message or f"Failed with code {code or 'unknown'}")
        if body.get("code") == 200:
            return AddOutcome(True, body)
        if body.get("success") is True:
            return AddOutcome(True, body)
        if body.get("error"):
            return AddOutcome(False, body, str(body["error"]))
        return AddOutcome(False, body, "No success code in response body")

    if isinstance(body, str):
        if "200" in body or "success" in body.lower():
            return AddOutcome(True, body)
        return AddOutcome(False, body, f"String response: {body[:100]}")

    return AddOutcome(False, body, "Empty or invalid response body")


def attempt_direct_add(settings: Settings, chat_id: str, participants: List[Dict[str, Any]]) -> AddOutcome:
    base_url = _require_provider(settings)
    participant_id = participants[0]["id"]
    url = f"{base_url}/groups/{quote(chat_id, safe='')}/participants/add"
    logger.info(f"[invite] Adding {participant_id} to {chat_id} via {url}")

    try:
        response = requests.post(
            url,
            headers={**_headers(settings, accept="*/*"), "Content-Type": "application/json"},
            json={"participants": participants},
            timeout=settings.whatsapp_timeout,
        )
    except requests.RequestException as e:
        logger.warning(f"[invite] Add request failed: {e}")
        return AddOutcome(False, None, f"Request failed: {e}")

    body = _parse_body(response.text)
    logger.debug(f"[invite] Add response status={response.status_code} body={str(body)[:200]}")
    outcome = interpret_add_response(body, participant_id)
    if outcome.success:
        logger.info(f"[invite] Direct add succeeded for {participant_id}")
    return outcome


def extract_invite_code(text: str) -> str:
    code: Any = ""
    if text:
        try:
            data = json.loads(text)
        except ValueError:
            code = text.strip().strip('"').strip()
        else:
            if isinstance(data, dict):
                code = next((data[key] for key in INVITE_CODE_KEYS if data.get(key)), "")
            else:
                code = data
    if not isinstance(code, str):
        return ""
    code = code.replace(INVITE_LINK_PREFIX, "").replace("chat.whatsapp.com/", "")
    return code.strip()


def fetch_invite_link(settings: Settings, chat_id: str) -> InviteLinkOutcome:
    base_url = _require_provider(settings)
    url = f"{base_url}/groups/{quote(chat_id, safe='')}/invite-code"
    logger.info(f"[invite] Fetching invite code via {url}")

    try:
        response = requests.get(url, headers=_headers(settings), timeout=settings.whatsapp_timeout)
    except requests.RequestException as e:
        logger.warning(f"[invite] Invite code request failed: {e}")
        return InviteLinkOutcome(error=f"Request failed: {e}")

    if not response.ok:
        return InviteLinkOutcome(error=f"HTTP {response.status_code}: {response.text[:200]}")

    code = extract_invite_code(response.text)
    if not code:
        return InviteLinkOutcome(error="Invite code empty or not found in response")
    return InviteLinkOutcome(link=f"{INVITE_LINK_PREFIX}{code}")


def compose_invite_message(link: str, student_name: Optional[str] = None, course_name: Optional[str] = None) -> str:
    if student_name and course_name:
        return f'{student_name}! Please join the "{course_name}" group {link}'
    if student_name:
        return f"{student_name}! Please join the group {link}"
    return f"Please join the group {link}"


def invite_participant(
    settings: Settings,
    chat_id: str,
    participants: List[Dict[str, Any]],
    student_name: Optional[str] = None,
    course_name: Optional[str] = None,
) -> InvitationResult:
    participant_id = participants[0]["id"]
    added = attempt_direct_add(settings, chat_id, participants)
    if added.success:
        return InvitationResult(method=DIRECT_ADD, participant_id=participant_id, data=added.body)

    logger.info(f"[invite] Direct add failed ({added.error}), falling back to invite link")
    invite = fetch_invite_link(settings, chat_id)
    if invite.link:
        return InvitationResult(
            method=MANUAL_INVITE_REQUIRED,
            participant_id=participant_id,
            invite_link=invite.link,
            message_to_send=compose_invite_message(invite.link, student_name, course_name),
            add_error=added.error,
        )

    logger.error(f"[invite] Could not invite {participant_id} to {chat_id}: {added.error} / {invite.error}")
    return InvitationResult(
        method=COMPLETE_FAILURE,
        participant_id=participant_id,
        status_code=500,
        add_error=added.error,
        invite_error=invite.error,
    )
