from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import jwt, JWTError

from app.core.config import settings

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


def create_admin_token(subject: str = ADMIN_SUBJECT) -> str:
    """Sign a token proving the admin password was entered.

    Args:
        subject: Fixed subject carried by the token

    Returns:
        Encoded JWT expiring after ADMIN_TOKEN_TTL_HOURS
    """
    now = datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(hours=settings.ADMIN_TOKEN_TTL_HOURS),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_admin_token(token: Optional[str]) -> Optional[dict]:
    """Decode an admin token; None when it is missing, tampered with or expired."""
    if not token:
        return None
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {str(e)}")
        return None

    if decoded.get("sub") != ADMIN_SUBJECT:
        logger.warning(f"Unexpected token subject: {decoded.get('sub')}")
        return None
    return decoded
