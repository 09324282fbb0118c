from sqlalchemy import func
from typing import Dict
import logging

from .base import BaseService
from .access import appointment_scope, pet_scope
from ..core.security import UserRole
from ..models.appointment import Appointment, AppointmentStatus
from ..models.pet import Pet
from ..models.user import User

logger = logging.getLogger(__name__)

class DashboardService(BaseService):
    """Role-scoped counters for the landing dashboard."""

    def _scoped(self, model, scope):
        query = self.db.query(func.count(model.id))
        if scope is not None:
            column, value = scope
            query = query.filter(getattr(model, column) == value)
        return query

    def get_stats(self, user: User) -> Dict:
        appointment_filter = appointment_scope(user)

        by_status = {status.value: 0 for status in AppointmentStatus}
        query = self.db.query(Appointment.status, func.count(Appointment.id))
        if appointment_filter is not None:
            column, value = appointment_filter
            query = query.filter(getattr(Appointment, column) == value)
        for status, count in query.group_by(Appointment.status).all():
            by_status[status.value] = count

        stats = {
            "role": user.role.value,
            "appointments": sum(by_status.values()),
            "appointments_by_status": by_status,
        }

        if user.role == UserRole.ADMIN:
            stats["pets"] = self._scoped(Pet, pet_scope(user)).scalar()
            stats["veterinarians"] = self.db.query(func.count(User.id)).filter(
                User.role == UserRole.VETERINARIAN
            ).scalar()
        elif user.role == UserRole.CLIENT:
            stats["pets"] = self._scoped(Pet, pet_scope(user)).scalar()
        elif user.role == UserRole.VETERINARIAN:
            pass
        else:
            raise ValueError(f"Unhandled role: {user.role!r}")
        return stats
