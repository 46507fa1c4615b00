from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from healthconnect.config.constants import TIME_SLOTS
from healthconnect.core.middleware import get_db, get_current_user, require_roles
from healthconnect.schemas.shared import Role
from healthconnect.db.crud.appointment import get_appointments
from healthconnect.routes.appointment.services import book_appointment
from healthconnect.schemas.appointment import AppointmentOut, BookingRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("/", response_model=AppointmentOut, status_code=201)
async def create_appointment_route(
    booking: BookingRequest,
    db: AsyncSession = Depends(get_db),
    current_user: dict = Depends(require_roles([Role.patient.value]))
):
    """Book an appointment for the current patient; other roles get 403"""
    return await book_appointment(
        db,
        patient_id=int(current_user["user_id"]),
        data=booking,
    )


@router.get("/", response_model=List[AppointmentOut])
async def get_appointments_route(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Appointments visible to the current user"""
    return await get_appointments(
        db=db,
        user_id=int(current_user["user_id"]),
        role=current_user["role"],
        skip=skip,
        limit=limit,
    )


@router.get("/slots", response_model=List[str])
async def get_time_slots():
    """Bookable time slots, morning and afternoon shifts"""
    return TIME_SLOTS
