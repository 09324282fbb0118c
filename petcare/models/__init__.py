from .user import User
from .pet import Pet, PetSpecies, MedicalRecord, Vaccination
from .appointment import Appointment, AppointmentStatus

__all__ = [
    "User",
    "Pet",
    "PetSpecies",
    "MedicalRecord",
    "Vaccination",
    "Appointment",
    "AppointmentStatus",
]
