from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session
from typing import Any

from ...core.database import get_db
from ...core.responses import success_response
from ...api.deps import get_current_user
from ...services.pet_service import PetService
from ...schemas.pet import PetResponse
from ...models.user import User

router = APIRouter(prefix="/pets", tags=["Pets"])

def _pet_data(pet) -> dict:
    return {"pet": PetResponse.model_validate(pet)}

@router.post("")
def create_pet(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Register a pet owned by the current user."""
    pet = PetService(db).create_pet(current_user, payload)
    return success_response(request, _pet_data(pet), "Pet created successfully", status.HTTP_201_CREATED)

@router.get("")
def list_pets(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List own pets (all pets for admins)."""
    pets = PetService(db).list_pets(current_user)
    return success_response(
        request,
        {"pets": [PetResponse.model_validate(pet) for pet in pets]},
        "Pets retrieved successfully",
    )

@router.get("/{pet_id}")
def get_pet(
    pet_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    pet = PetService(db).get_pet(current_user, pet_id)
    return success_response(request, _pet_data(pet), "Pet retrieved successfully")

@router.put("/{pet_id}")
def update_pet(
    pet_id: int,
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    pet = PetService(db).update_pet(current_user, pet_id, payload)
    return success_response(request, _pet_data(pet), "Pet updated successfully")

@router.delete("/{pet_id}")
def delete_pet(
    pet_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    PetService(db).delete_pet(current_user, pet_id)
    return success_response(request, None, "Pet deleted successfully")

@router.post("/{pet_id}/medical-history")
def add_medical_record(
    pet_id: int,
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Append a medical history entry (treating veterinarian or admin)."""
    pet = PetService(db).add_medical_record(current_user, pet_id, payload)
    return success_response(request, _pet_data(pet), "Medical record added", status.HTTP_201_CREATED)

@router.post("/{pet_id}/vaccinations")
def add_vaccination(
    pet_id: int,
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Append a vaccination entry (treating veterinarian or admin)."""
    pet = PetService(db).add_vaccination(current_user, pet_id, payload)
    return success_response(request, _pet_data(pet), "Vaccination added", status.HTTP_201_CREATED)
