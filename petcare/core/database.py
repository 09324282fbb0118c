from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from typing import Generator
import time
import redis
from .config import settings

def _build_engine(url: str):
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
    )

engine = _build_engine(settings.get_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Redis setup - in-memory stand-in for testing
if settings.TESTING:
    class RedisMock:
        """Dict-backed subset of the Redis commands used by the rate limiter."""

        def __init__(self):
            self.data = {}
            self.expiry = {}

        def _purge(self, key):
            deadline = self.expiry.get(key)
            if deadline is not None and deadline <= time.monotonic():
                self.data.pop(key, None)
                self.expiry.pop(key, None)

        def setex(self, key, ttl, value):
            self.data[key] = str(value)
            self.expiry[key] = time.monotonic() + ttl
            return True

        def get(self, key):
            self._purge(key)
            return self.data.get(key)

        def delete(self, key):
            self.expiry.pop(key, None)
            if key in self.data:
                del self.data[key]
                return 1
            return 0

        def incr(self, key):
            self._purge(key)
            self.data[key] = str(int(self.data.get(key, 0)) + 1)
            return int(self.data[key])

        def expire(self, key, ttl):
            if key not in self.data:
                return False
            self.expiry[key] = time.monotonic() + ttl
            return True

        def flushall(self):
            self.data.clear()
            self.expiry.clear()
            return True

    redis_client = RedisMock()
else:
    # Real Redis client for production
    redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

# Database dependency
def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Redis dependency
def get_redis():
    """Get Redis client."""
    return redis_client

# Database initialization
def init_db():
    """Initialize database tables."""
    # Models must be imported so their tables are registered on Base.metadata
    from ..models import user, pet, appointment  # noqa: F401
    Base.metadata.create_all(bind=engine)
