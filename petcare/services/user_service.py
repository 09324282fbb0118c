from typing import List
import logging

from .base import BaseService
from .access import can_delete_user, can_list_users, require
from ..core.exceptions import NotFound, ValidationError
from ..core.security import UserRole
from ..models.appointment import Appointment
from ..models.pet import Pet
from ..models.user import User

logger = logging.getLogger(__name__)

class UserService(BaseService):

    def list_veterinarians(self) -> List[User]:
        return self.db.query(User).filter(
            User.role == UserRole.VETERINARIAN
        ).order_by(User.name).all()

    def list_users(self, user: User) -> List[User]:
        require(can_list_users(user), user, "Access denied. Admin only.")
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def delete_user(self, user: User, user_id: int) -> None:
        """Delete a user that nothing references any more.

        Pets and appointments are never cascaded or orphaned; the caller must
        remove them first.
        """
        require(can_list_users(user), user, "Access denied. Admin only.")
        target = self.db.query(User).filter(User.id == user_id).first()
        if not target:
            raise NotFound("User not found")
        require(can_delete_user(user, target), user, "You cannot delete your own account")

        owns_pets = self.db.query(Pet.id).filter(Pet.owner_id == target.id).first()
        in_appointments = self.db.query(Appointment.id).filter(
            (Appointment.owner_id == target.id) | (Appointment.veterinarian_id == target.id)
        ).first()
        if owns_pets or in_appointments:
            raise ValidationError("User still owns pets or appointments")

        self.db.delete(target)
        self._commit()
        logger.info(f"User {user.id} deleted user {user_id}")
