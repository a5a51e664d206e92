"""
Common Dependencies
===================

Shared dependencies used across the application: the authenticated
user, the record store for the request, the insight feed and the
Gemini service.
"""

import logging
from typing import Annotated, AsyncIterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cortexia.config import settings
from cortexia.core.errors import AuthenticationError, ErrorCodes
from cortexia.core.security import Identity, decode_token, identity_from_payload
from cortexia.db.session import session_scope
from cortexia.repositories.store import LifeStore
from cortexia.services.gemini_llm import GeminiLLMService, get_gemini_service
from cortexia.services.insights import InsightFeed

logger = logging.getLogger(__name__)

# Security scheme for JWT authentication
security = HTTPBearer(auto_error=False)

# Development user (owner of the seeded mock data)
DEV_USER_ID = "1"
DEV_USER_EMAIL = "dev@test.local"


# =============================================================================
# User resolution
# =============================================================================

async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Identity:
    """
    Get current authenticated user.

    Raises 401 if not authenticated or token is invalid.
    In development with DEV_AUTH_DISABLED=True, returns the dev user.
    """
    if settings.auth_disabled:
        identity = Identity(user_id=DEV_USER_ID, email=DEV_USER_EMAIL, name="Development User")
    else:
        if credentials is None:
            raise AuthenticationError(headers={"WWW-Authenticate": "Bearer"})

        payload = decode_token(credentials.credentials)
        identity = identity_from_payload(payload) if payload is not None else None
        if identity is None:
            raise AuthenticationError(
                code=ErrorCodes.AUTH_INVALID_TOKEN,
                message="Invalid or expired token",
                headers={"WWW-Authenticate": "Bearer"},
            )

    # Picked up by the New Relic middleware
    request.state.user_id = identity.user_id
    return identity


# Type alias for authenticated user dependency
CurrentUser = Annotated[Identity, Depends(get_current_user)]


# =============================================================================
# Storage
# =============================================================================

async def get_store(request: Request) -> AsyncIterator[LifeStore]:
    """
    Record store for the current request.

    Without a database this is the in-memory store held on the app;
    otherwise a store bound to a session committed at the end of the
    request.
    """
    if not settings.database_configured:
        yield request.app.state.store
        return

    async with session_scope() as session:
        yield LifeStore.for_session(session)


Store = Annotated[LifeStore, Depends(get_store)]


def get_insight_feed(request: Request) -> InsightFeed:
    return request.app.state.insight_feed


Feed = Annotated[InsightFeed, Depends(get_insight_feed)]

Gemini = Annotated[GeminiLLMService, Depends(get_gemini_service)]
