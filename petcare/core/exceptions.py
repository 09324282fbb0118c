from fastapi import HTTPException, status
from typing import List, Optional

class AppError(HTTPException):
    """Base class for errors rendered as the failure envelope."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default = "Operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[str]] = None,
        headers: Optional[dict] = None,
    ):
        self.message = message or self.message_default
        self.errors = errors
        super().__init__(
            status_code=self.status_code_default,
            detail=self.message,
            headers=headers,
        )

class ValidationError(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Validation failed"

class InvalidUpdate(AppError):
    status_code_default = status.HTTP_400_BAD_REQUEST
    message_default = "Invalid updates"

class Unauthorized(AppError):
    status_code_default = status.HTTP_401_UNAUTHORIZED
    message_default = "Not authorized"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        super().__init__(message, errors, headers={"WWW-Authenticate": "Bearer"})

class TokenInvalid(Unauthorized):
    message_default = "Invalid token"

class TokenExpired(Unauthorized):
    message_default = "Token expired"

class AccessDenied(AppError):
    status_code_default = status.HTTP_403_FORBIDDEN
    message_default = "Access denied"

class NotFound(AppError):
    status_code_default = status.HTTP_404_NOT_FOUND
    message_default = "Resource not found"

class RateLimitExceeded(AppError):
    status_code_default = status.HTTP_429_TOO_MANY_REQUESTS
    message_default = "Too many requests. Please try again later."

class InternalError(AppError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_default = "An unexpected error occurred"
