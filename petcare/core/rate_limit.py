from fastapi import Depends, Request
import logging

from .config import settings
from .database import get_redis
from .exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)

def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Fixed-window request counter per client address."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:{client_ip}"

    current_requests = redis_client.incr(key)
    if current_requests == 1:
        # First hit opens the window
        redis_client.expire(key, settings.RATE_LIMIT_WINDOW_SECONDS)

    if current_requests > settings.RATE_LIMIT_REQUESTS:
        logger.warning(f"Rate limit exceeded for {client_ip}")
        raise RateLimitExceeded()
