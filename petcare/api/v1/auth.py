from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Any

from ...core.config import settings
from ...core.database import get_db
from ...core.responses import success_response
from ...api.deps import get_current_user
from ...services.auth_service import AuthService
from ...schemas.auth import UserResponse
from ...models.user import User

router = APIRouter(prefix="/auth", tags=["Authentication"])

def _session_payload(user: User, token: str) -> dict:
    return {
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
        },
        "token": token,
    }

def set_session_cookie(response: JSONResponse, token: str) -> JSONResponse:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )
    return response

@router.post("/register")
def register(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """Register a new user and start a session."""
    user, token = AuthService(db).register_user(payload)
    response = success_response(
        request,
        _session_payload(user, token),
        "Registration successful",
        status.HTTP_201_CREATED,
    )
    return set_session_cookie(response, token)

@router.post("/login")
def login(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """Authenticate user and start a session."""
    user, token = AuthService(db).authenticate_user(payload)
    response = success_response(request, _session_payload(user, token), "Login successful")
    return set_session_cookie(response, token)

@router.post("/logout")
def logout(request: Request):
    """End the browser session by clearing the cookie."""
    response = success_response(request, None, "Logout successful")
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )
    return response

@router.get("/profile")
def get_profile(
    request: Request,
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return success_response(
        request,
        {"user": UserResponse.model_validate(current_user)},
        "Profile retrieved",
    )
