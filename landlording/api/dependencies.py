"""FastAPI dependency injection: storage and authorised scoring capabilities.

Endpoints never receive a session or a raw store. They depend on
``require_admin`` or ``require_cron``, which authenticate the caller and
return a ``ScoringService`` scoped to scoring operations.
"""

import secrets

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from landlording.config.settings import Settings, get_settings
from landlording.db.session import get_session_factory
from landlording.repositories.scoring import SqlScoreStore
from landlording.scoring.service import ScoringService

_bearer = HTTPBearer(auto_error=False)


def _token_matches(presented: str, expected: str) -> bool:
    return bool(expected) and secrets.compare_digest(
        presented.encode("utf-8"), expected.encode("utf-8"),
    )


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


async def get_score_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlScoreStore:
    return SqlScoreStore(session_factory)


# ---------------------------------------------------------------------------
# Authorisation
# ---------------------------------------------------------------------------


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
    store: SqlScoreStore = Depends(get_score_store),
) -> ScoringService:
    """Admin bearer token -> scoring capability. 401 without one, 403 if wrong."""
    if credentials is None or not settings.ADMIN_API_TOKEN:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not _token_matches(credentials.credentials, settings.ADMIN_API_TOKEN):
        raise HTTPException(status_code=403, detail="Admin access required")
    return ScoringService(store)


async def require_cron(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
    store: SqlScoreStore = Depends(get_score_store),
) -> ScoringService:
    """``Authorization: Bearer <CRON_SECRET>``; any mismatch is a 401."""
    if credentials is None or not _token_matches(credentials.credentials, settings.CRON_SECRET):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ScoringService(store)
