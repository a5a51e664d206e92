"""
Security Module
===============

Verification of bearer tokens issued by the identity provider.

The provider signs session JWTs with the shared ``JWT_SECRET``. The API
never issues tokens itself; it only decodes them and extracts the user
identity (``sub``, falling back to the provider's ``id`` claim).
"""

from dataclasses import dataclass
from typing import Any, Optional

from jose import JWTError, jwt

from cortexia.config import settings


@dataclass(frozen=True)
class Identity:
    """Authenticated user identity extracted from a verified token."""

    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded payload if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
        return payload
    except JWTError:
        return None


def identity_from_payload(payload: dict[str, Any]) -> Optional[Identity]:
    """Build an Identity from a decoded payload, or None if it has no subject."""
    subject = payload.get("sub") or payload.get("id")
    if subject is None or str(subject).strip() == "":
        return None

    return Identity(
        user_id=str(subject),
        email=payload.get("email"),
        name=payload.get("name"),
    )
