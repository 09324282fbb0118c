"""
Role and ownership based access decisions.

Every function here is a pure decision over the acting user and, where
relevant, the target record. Each one branches over every UserRole member so
that adding a role forces a decision at each call site; an unknown role is a
programming error and raises ValueError.
"""
from enum import Enum
import logging
from typing import Optional, Tuple

from ..core.exceptions import AccessDenied
from ..core.security import UserRole
from ..models.appointment import Appointment
from ..models.pet import Pet
from ..models.user import User

logger = logging.getLogger(__name__)

class Action(str, Enum):
    CREATE = "create"
    LIST = "list"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    ANNOTATE = "annotate"  # append medical history / vaccinations

def _unhandled(role) -> ValueError:
    return ValueError(f"Unhandled role: {role!r}")

def _owns(user: User, record) -> bool:
    return record is not None and record.owner_id == user.id

def can_access_pet(user: User, action: Action, pet: Optional[Pet] = None) -> bool:
    """Decide whether user may perform action on pet.

    Create and list are open to every role: a created pet always belongs to
    its creator and listings are filtered by pet_scope().
    """
    if action in (Action.CREATE, Action.LIST):
        return True

    role = user.role
    if role == UserRole.ADMIN:
        return True
    elif role == UserRole.VETERINARIAN:
        if action == Action.ANNOTATE:
            return pet is not None and any(
                appointment.veterinarian_id == user.id for appointment in pet.appointments
            )
        return _owns(user, pet)
    elif role == UserRole.CLIENT:
        if action == Action.ANNOTATE:
            return False
        return _owns(user, pet)
    raise _unhandled(role)

def pet_scope(user: User) -> Optional[Tuple[str, int]]:
    """Column/value filter for pet listings; None means unrestricted."""
    role = user.role
    if role == UserRole.ADMIN:
        return None
    elif role in (UserRole.VETERINARIAN, UserRole.CLIENT):
        return ("owner_id", user.id)
    raise _unhandled(role)

def appointment_scope(user: User) -> Optional[Tuple[str, int]]:
    """Column/value filter for appointment listings; None means unrestricted."""
    role = user.role
    if role == UserRole.ADMIN:
        return None
    elif role == UserRole.VETERINARIAN:
        return ("veterinarian_id", user.id)
    elif role == UserRole.CLIENT:
        return ("owner_id", user.id)
    raise _unhandled(role)

def can_access_appointment(
    user: User,
    action: Action,
    appointment: Optional[Appointment] = None,
) -> bool:
    """Decide whether user may perform action on appointment.

    Updates, which include status transitions, are reserved for admins and
    the assigned veterinarian.
    """
    if action in (Action.CREATE, Action.LIST):
        return True

    role = user.role
    if role == UserRole.ADMIN:
        return True
    elif role == UserRole.VETERINARIAN:
        if action not in (Action.READ, Action.UPDATE):
            return False
        return appointment is not None and appointment.veterinarian_id == user.id
    elif role == UserRole.CLIENT:
        if action != Action.READ:
            return False
        return _owns(user, appointment)
    raise _unhandled(role)

def can_list_users(user: User) -> bool:
    role = user.role
    if role == UserRole.ADMIN:
        return True
    elif role in (UserRole.VETERINARIAN, UserRole.CLIENT):
        return False
    raise _unhandled(role)

def can_delete_user(user: User, target: User) -> bool:
    role = user.role
    if role == UserRole.ADMIN:
        return user.id != target.id
    elif role in (UserRole.VETERINARIAN, UserRole.CLIENT):
        return False
    raise _unhandled(role)

def require(allowed: bool, user: User, message: str = "Access denied") -> None:
    """Raise AccessDenied unless allowed."""
    if not allowed:
        logger.warning(f"Access denied for user {user.id} ({user.role.value}): {message}")
        raise AccessDenied(message)
