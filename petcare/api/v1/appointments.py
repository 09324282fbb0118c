from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session
from typing import Any

from ...core.database import get_db
from ...core.responses import success_response
from ...api.deps import get_current_user
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import AppointmentResponse
from ...models.user import User

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("")
def create_appointment(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Book an appointment for one of the current user's pets."""
    appointment = AppointmentService(db).create_appointment(current_user, payload)
    return success_response(
        request,
        {"appointment": AppointmentResponse.model_validate(appointment)},
        "Appointment created successfully",
        status.HTTP_201_CREATED,
    )

@router.get("")
def list_appointments(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List appointments visible to the current user's role."""
    appointments = AppointmentService(db).list_appointments(current_user)
    return success_response(
        request,
        {"appointments": [AppointmentResponse.model_validate(a) for a in appointments]},
        "Appointments retrieved successfully",
    )

@router.get("/{appointment_id}")
def get_appointment(
    appointment_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    appointment = AppointmentService(db).get_appointment(current_user, appointment_id)
    return success_response(
        request,
        {"appointment": AppointmentResponse.model_validate(appointment)},
        "Appointment retrieved successfully",
    )

@router.put("/{appointment_id}")
def update_appointment(
    appointment_id: int,
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update appointment details or status (assigned veterinarian or admin)."""
    appointment = AppointmentService(db).update_appointment(current_user, appointment_id, payload)
    return success_response(
        request,
        {"appointment": AppointmentResponse.model_validate(appointment)},
        "Appointment updated successfully",
    )
