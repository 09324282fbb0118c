from typing import Any, List
import logging

from .base import BaseService
from .access import Action, can_access_pet, pet_scope, require
from ..core.exceptions import InvalidUpdate, NotFound
from ..core.security import UserRole
from ..models.pet import Pet, MedicalRecord, Vaccination
from ..models.user import User
from ..schemas.pet import (
    PET_UPDATE_FIELDS, PetCreate, PetUpdate, MedicalRecordCreate, VaccinationCreate
)
from ..schemas.validation import validate_or_raise
from ..utils.strings import title_case

logger = logging.getLogger(__name__)

class PetService(BaseService):

    def save_pet(self, pet: Pet) -> Pet:
        """Normalize and persist a pet."""
        pet.name = title_case(pet.name)
        pet.species = title_case(pet.species)
        self.db.add(pet)
        self._commit(pet)
        return pet

    def create_pet(self, user: User, payload: Any) -> Pet:
        """Create a pet owned by the acting user.

        Any owner supplied in the payload is ignored.
        """
        require(can_access_pet(user, Action.CREATE), user)
        pet_data = validate_or_raise(PetCreate, payload)

        pet = Pet(**pet_data.model_dump(), owner_id=user.id)
        self.save_pet(pet)
        logger.info(f"User {user.id} created pet {pet.id}")
        return pet

    def list_pets(self, user: User) -> List[Pet]:
        query = self.db.query(Pet)
        scope = pet_scope(user)
        if scope is not None:
            column, value = scope
            query = query.filter(getattr(Pet, column) == value)
        return query.order_by(Pet.id).all()

    def _load(self, pet_id: int) -> Pet:
        pet = self.db.query(Pet).filter(Pet.id == pet_id).first()
        if not pet:
            raise NotFound("Pet not found")
        return pet

    def get_pet(self, user: User, pet_id: int) -> Pet:
        pet = self._load(pet_id)
        require(can_access_pet(user, Action.READ, pet), user)
        return pet

    def update_pet(self, user: User, pet_id: int, payload: Any) -> Pet:
        """Replace the editable fields of a pet.

        Unknown field names reject the whole update; schema problems are all
        reported together.
        """
        pet = self._load(pet_id)
        require(can_access_pet(user, Action.UPDATE, pet), user)

        if isinstance(payload, dict) and not set(payload).issubset(PET_UPDATE_FIELDS):
            raise InvalidUpdate()
        pet_data = validate_or_raise(PetUpdate, payload, abort_early=False)

        for key, value in pet_data.model_dump(exclude_unset=True).items():
            setattr(pet, key, value)
        self.save_pet(pet)
        logger.info(f"User {user.id} updated pet {pet.id}")
        return pet

    def delete_pet(self, user: User, pet_id: int) -> None:
        pet = self._load(pet_id)
        require(can_access_pet(user, Action.DELETE, pet), user)

        self.db.delete(pet)
        self._commit()
        logger.info(f"User {user.id} deleted pet {pet_id}")

    def add_medical_record(self, user: User, pet_id: int, payload: Any) -> Pet:
        pet = self._load(pet_id)
        require(can_access_pet(user, Action.ANNOTATE, pet), user)
        record_data = validate_or_raise(MedicalRecordCreate, payload)

        veterinarian_id = user.id if user.role == UserRole.VETERINARIAN else None
        pet.medical_history.append(
            MedicalRecord(**record_data.model_dump(), veterinarian_id=veterinarian_id)
        )
        self._commit(pet)
        logger.info(f"User {user.id} added a medical record to pet {pet.id}")
        return pet

    def add_vaccination(self, user: User, pet_id: int, payload: Any) -> Pet:
        pet = self._load(pet_id)
        require(can_access_pet(user, Action.ANNOTATE, pet), user)
        vaccination_data = validate_or_raise(VaccinationCreate, payload)

        pet.vaccinations.append(Vaccination(**vaccination_data.model_dump()))
        self._commit(pet)
        logger.info(f"User {user.id} added vaccination '{vaccination_data.name}' to pet {pet.id}")
        return pet
