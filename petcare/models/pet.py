from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Float, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class PetSpecies(str, enum.Enum):
    DOG = "Dog"
    CAT = "Cat"
    BIRD = "Bird"
    RABBIT = "Rabbit"
    OTHER = "Other"

class Pet(Base):
    __tablename__ = "pets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    species = Column(String(20), nullable=False, index=True)
    breed = Column(String(100), nullable=True)
    age = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    owner = relationship("User", back_populates="pets")
    medical_history = relationship(
        "MedicalRecord",
        back_populates="pet",
        cascade="all, delete-orphan",
        order_by="MedicalRecord.date",
    )
    vaccinations = relationship(
        "Vaccination",
        back_populates="pet",
        cascade="all, delete-orphan",
        order_by="Vaccination.date",
    )
    # Appointments outlive their pet; the ORM clears pet_id on delete
    appointments = relationship("Appointment", back_populates="pet")

    def __repr__(self):
        return f"<Pet(id={self.id}, name='{self.name}', species='{self.species}')>"

class MedicalRecord(Base):
    __tablename__ = "pet_medical_records"

    id = Column(Integer, primary_key=True, index=True)
    pet_id = Column(Integer, ForeignKey("pets.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    description = Column(Text, nullable=False)
    veterinarian_id = Column(Integer, ForeignKey("users.id"), nullable=True)

    pet = relationship("Pet", back_populates="medical_history")
    veterinarian = relationship("User")

    def __repr__(self):
        return f"<MedicalRecord(id={self.id}, pet_id={self.pet_id}, date='{self.date}')>"

class Vaccination(Base):
    __tablename__ = "pet_vaccinations"

    id = Column(Integer, primary_key=True, index=True)
    pet_id = Column(Integer, ForeignKey("pets.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    next_due = Column(Date, nullable=True)

    pet = relationship("Pet", back_populates="vaccinations")

    def __repr__(self):
        return f"<Vaccination(id={self.id}, pet_id={self.pet_id}, name='{self.name}')>"
