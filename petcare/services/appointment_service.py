from typing import Any, List
import logging

from .base import BaseService
from .access import Action, appointment_scope, can_access_appointment, can_access_pet, require
from ..core.exceptions import InvalidUpdate, NotFound, ValidationError
from ..core.security import UserRole
from ..models.appointment import Appointment, AppointmentStatus, can_transition
from ..models.pet import Pet
from ..models.user import User
from ..schemas.appointment import APPOINTMENT_UPDATE_FIELDS, AppointmentCreate, AppointmentUpdate
from ..schemas.validation import validate_or_raise

logger = logging.getLogger(__name__)

# Columns that may be changed but never cleared
NON_NULLABLE_UPDATES = ("date", "time", "reason", "status")

class AppointmentService(BaseService):

    def create_appointment(self, user: User, payload: Any) -> Appointment:
        """Book an appointment for one of the acting user's pets.

        The owner is always the acting user; an owner in the payload is ignored.
        """
        require(can_access_appointment(user, Action.CREATE), user)
        appointment_data = validate_or_raise(AppointmentCreate, payload)

        pet = self.db.query(Pet).filter(Pet.id == appointment_data.pet).first()
        if not pet:
            raise NotFound("Pet not found")
        require(
            can_access_pet(user, Action.READ, pet),
            user,
            "Appointments can only be booked for your own pets",
        )

        veterinarian = self.db.query(User).filter(
            User.id == appointment_data.veterinarian,
            User.role == UserRole.VETERINARIAN
        ).first()
        if not veterinarian:
            raise NotFound("Veterinarian not found")

        appointment = Appointment(
            pet_id=pet.id,
            owner_id=user.id,
            veterinarian_id=veterinarian.id,
            date=appointment_data.date,
            time=appointment_data.time,
            reason=appointment_data.reason,
            notes=appointment_data.notes,
            status=AppointmentStatus.SCHEDULED,
        )
        self.db.add(appointment)
        self._commit(appointment)
        logger.info(
            f"User {user.id} booked appointment {appointment.id} "
            f"with veterinarian {veterinarian.id}"
        )
        return appointment

    def list_appointments(self, user: User) -> List[Appointment]:
        query = self.db.query(Appointment)
        scope = appointment_scope(user)
        if scope is not None:
            column, value = scope
            query = query.filter(getattr(Appointment, column) == value)
        return query.order_by(Appointment.date.desc(), Appointment.time.desc()).all()

    def _load(self, appointment_id: int) -> Appointment:
        appointment = self.db.query(Appointment).filter(
            Appointment.id == appointment_id
        ).first()
        if not appointment:
            raise NotFound("Appointment not found")
        return appointment

    def get_appointment(self, user: User, appointment_id: int) -> Appointment:
        appointment = self._load(appointment_id)
        require(can_access_appointment(user, Action.READ, appointment), user)
        return appointment

    def update_appointment(self, user: User, appointment_id: int, payload: Any) -> Appointment:
        """Apply a partial update.

        Any field outside APPOINTMENT_UPDATE_FIELDS rejects the whole update.
        Status may only move from scheduled to completed or cancelled.
        """
        appointment = self._load(appointment_id)
        require(
            can_access_appointment(user, Action.UPDATE, appointment),
            user,
            "Only the assigned veterinarian or an admin can update this appointment",
        )

        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        if not set(payload).issubset(APPOINTMENT_UPDATE_FIELDS):
            raise InvalidUpdate()

        update_data = validate_or_raise(AppointmentUpdate, payload, abort_early=False)
        updates = update_data.model_dump(exclude_unset=True)

        cleared = [key for key in NON_NULLABLE_UPDATES if key in updates and updates[key] is None]
        if cleared:
            messages = [f'"{key}" must not be empty' for key in cleared]
            raise ValidationError(", ".join(messages), errors=messages)

        new_status = updates.get("status")
        previous_status = appointment.status
        if new_status is not None and not can_transition(previous_status, new_status):
            raise InvalidUpdate(
                f"Cannot change status from {previous_status.value} to {new_status.value}"
            )

        for key, value in updates.items():
            setattr(appointment, key, value)
        self._commit(appointment)

        if new_status is not None and new_status != previous_status:
            logger.info(
                f"Appointment {appointment.id} moved from {previous_status.value} "
                f"to {new_status.value} by user {user.id}"
            )
        return appointment
