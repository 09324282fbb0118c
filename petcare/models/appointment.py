from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Text, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

# Terminal states have no outgoing transitions
STATUS_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
    AppointmentStatus.COMPLETED: set(),
    AppointmentStatus.CANCELLED: set(),
}

def can_transition(current: AppointmentStatus, new: AppointmentStatus) -> bool:
    """Re-asserting the current status is always allowed."""
    if current == new:
        return True
    return new in STATUS_TRANSITIONS[current]

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Relationships
    pet_id = Column(Integer, ForeignKey("pets.id", ondelete="SET NULL"), nullable=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    veterinarian_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Appointment details
    date = Column(Date, nullable=False, index=True)
    time = Column(String(20), nullable=False)
    reason = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(SQLEnum(AppointmentStatus), nullable=False, default=AppointmentStatus.SCHEDULED)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    pet = relationship("Pet", back_populates="appointments")
    owner = relationship("User", back_populates="appointments", foreign_keys=[owner_id])
    veterinarian = relationship(
        "User", back_populates="assigned_appointments", foreign_keys=[veterinarian_id]
    )

    def __repr__(self):
        return f"<Appointment(id={self.id}, pet_id={self.pet_id}, veterinarian_id={self.veterinarian_id}, date='{self.date}')>"
