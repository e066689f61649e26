import logging
import secrets
from typing import Optional

from fastapi import Depends, Header

from app.core.config import Settings, get_settings
from app.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def is_admin_token(token: Optional[str], admin_token: str) -> bool:
    """Checks a raw Authorization value against the configured admin token.

    The header is compared verbatim: no "Bearer " prefix is parsed. A missing
    or empty header never matches, and neither does anything when no admin
    token is configured.
    """
    if not token or not admin_token:
        return False
    return secrets.compare_digest(token.encode(), admin_token.encode())


async def require_admin(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Dependency that gates write endpoints behind the admin token.

    Raises:
        UnauthorizedError: The header is missing or does not match.
    """
    if not is_admin_token(authorization, settings.ADMIN_TOKEN):
        if not settings.ADMIN_TOKEN:
            logger.warning("Rejected admin request: KODO_ADMIN_TOKEN is not configured")
        else:
            logger.warning("Rejected admin request: invalid or missing Authorization header")
        raise UnauthorizedError()
