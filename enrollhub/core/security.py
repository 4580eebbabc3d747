import logging
import secrets

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from enrollhub.core.config import Settings, get_settings
from enrollhub.core.errors import AuthError

logger = logging.getLogger(__name__)

security = HTTPBasic(auto_error=False)


def require_admin(
    credentials: HTTPBasicCredentials = Depends(security),
    settings: Settings = Depends(get_settings),
) -> str:
    """Server-side check of the dashboard administrator's Basic credentials."""
    if not settings.admin_username or not settings.admin_password:
        logger.warning("[auth] ADMIN_USERNAME/ADMIN_PASSWORD not configured, refusing admin request")
        raise AuthError("Admin credentials are not configured")
    if credentials is None:
        raise AuthError("Authentication required")

    username_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.admin_username.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.admin_password.encode("utf-8")
    )
    if not (username_ok and password_ok):
        logger.info(f"[auth] Rejected credentials for user {credentials.username!r}")
        raise AuthError("Invalid username or password")
    return credentials.username
