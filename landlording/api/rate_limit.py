"""Per-client request rate limiting.

A ``RateLimiter`` owns its own storage and is attached to ``app.state``
when the application is built. Tests and multi-app deployments get
independent instances; ``reset()`` clears all counters.
"""

from fastapi import Depends, HTTPException, Request
from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from landlording.api.dependencies import require_admin
from landlording.config.settings import Settings
from landlording.scoring.service import ScoringService


class RateLimiter:
    """Fixed-window counter keyed by an arbitrary string."""

    def __init__(self, limit: int, window_seconds: int) -> None:
        if limit < 1 or window_seconds < 1:
            raise ValueError("limit and window_seconds must be positive")
        self._item = RateLimitItemPerSecond(limit, window_seconds)
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiter":
        return cls(
            limit=settings.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )

    @property
    def limit(self) -> int:
        return self._item.amount

    def check(self, key: str) -> bool:
        """Count one request for ``key``; False once the window is full."""
        return self._strategy.hit(self._item, key)

    def reset(self) -> None:
        self._storage.reset()


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_admin_recalculation(
    request: Request,
    service: ScoringService = Depends(require_admin),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ScoringService:
    """Admin capability, counted against the client's window only once authorised."""
    if not limiter.check(f"admin-scores:{client_key(request)}"):
        raise HTTPException(status_code=429, detail="Too many requests")
    return service
