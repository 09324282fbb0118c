import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..models.appointment import AppointmentStatus
from .auth import UserSummary
from .pet import PetSummary

APPOINTMENT_UPDATE_FIELDS = frozenset({"date", "time", "reason", "notes", "status"})

class AppointmentCreate(BaseModel):
    pet: int
    veterinarian: int
    date: datetime.date
    time: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1)
    notes: Optional[str] = None

    class Config:
        str_strip_whitespace = True

class AppointmentUpdate(BaseModel):
    date: Optional[datetime.date] = None
    time: Optional[str] = Field(None, min_length=1)
    reason: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None
    status: Optional[AppointmentStatus] = None

    class Config:
        str_strip_whitespace = True

class AppointmentResponse(BaseModel):
    id: int
    pet: Optional[PetSummary] = None
    owner: UserSummary
    veterinarian: UserSummary
    date: datetime.date
    time: str
    reason: str
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True
