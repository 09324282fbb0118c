from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import List, Optional

from ..core.config import settings
from ..core.database import get_db
from ..core.exceptions import TokenExpired, TokenInvalid, Unauthorized
from ..core.security import security, verify_token
from ..models.user import User

def extract_tokens(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> List[str]:
    """Candidate tokens: bearer header first, then the session cookie."""
    tokens = []
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        tokens.append(credentials.credentials)
    cookie = request.cookies.get(settings.COOKIE_NAME)
    if cookie:
        tokens.append(cookie)
    return tokens

def resolve_user_id(tokens: List[str]) -> int:
    """Return the subject of the first valid token.

    Raises the error of the last candidate when none of them verifies.
    """
    if not tokens:
        raise Unauthorized("Not authorized, no token")

    error = None
    for token in tokens:
        try:
            return verify_token(token)
        except (TokenExpired, TokenInvalid) as exc:
            error = exc
    raise error

def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the acting user from the request token."""
    user_id = resolve_user_id(extract_tokens(request, credentials))

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise Unauthorized("User not found")

    request.state.user = user
    return user
