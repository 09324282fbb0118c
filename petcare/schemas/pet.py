import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.pet import PetSpecies
from ..utils.strings import title_case
from .auth import UserSummary

PET_UPDATE_FIELDS = frozenset({"name", "species", "breed", "age", "weight"})

class PetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    species: str
    breed: Optional[str] = None
    age: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)

    class Config:
        str_strip_whitespace = True

    @field_validator("species")
    @classmethod
    def species_known(cls, value: str) -> str:
        normalized = title_case(value)
        allowed = [species.value for species in PetSpecies]
        if normalized not in allowed:
            raise ValueError(f"must be one of [{', '.join(allowed)}]")
        return normalized

class PetUpdate(PetCreate):
    pass

class MedicalRecordCreate(BaseModel):
    date: datetime.date
    description: str = Field(..., min_length=1)

    class Config:
        str_strip_whitespace = True

class VaccinationCreate(BaseModel):
    name: str = Field(..., min_length=1)
    date: datetime.date
    next_due: Optional[datetime.date] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("next_due")
    @classmethod
    def next_due_after_date(cls, value, info):
        given = info.data.get("date")
        if value is not None and given is not None and value < given:
            raise ValueError("must not be before the vaccination date")
        return value

class MedicalRecordResponse(BaseModel):
    id: int
    date: datetime.date
    description: str
    veterinarian_id: Optional[int] = None

    class Config:
        from_attributes = True

class VaccinationResponse(BaseModel):
    id: int
    name: str
    date: datetime.date
    next_due: Optional[datetime.date] = None

    class Config:
        from_attributes = True

class PetSummary(BaseModel):
    id: int
    name: str
    species: str
    breed: Optional[str] = None

    class Config:
        from_attributes = True

class PetResponse(BaseModel):
    id: int
    name: str
    species: str
    breed: Optional[str] = None
    age: Optional[float] = None
    weight: Optional[float] = None
    owner: UserSummary
    medical_history: List[MedicalRecordResponse] = []
    vaccinations: List[VaccinationResponse] = []
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True
