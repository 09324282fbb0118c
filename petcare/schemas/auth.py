from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..core.security import UserRole

class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.CLIENT
    phone: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("role", mode="before")
    @classmethod
    def role_lowercase(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    class Config:
        str_strip_whitespace = True

class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True

class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
