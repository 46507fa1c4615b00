# healthconnect/routes/appointment/services.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from healthconnect.config.constants import TIME_SLOTS
from healthconnect.core.errors import NotFound, ValidationFailure
from healthconnect.db.crud.appointment import create_appointment
from healthconnect.db.crud.doctor import get_doctor
from healthconnect.db.models import AppointmentModel
from healthconnect.schemas.appointment import BookingRequest

logger = logging.getLogger(__name__)


def validate_booking(data: BookingRequest, today: Optional[date] = None) -> None:
    """
    Date, then time slot, then reason. The first failing check is the one
    reported.
    """
    today = today or date.today()

    if data.appointment_date is None:
        raise ValidationFailure("Please select a date", field="appointment_date")
    # only days after today can be booked
    if data.appointment_date <= today:
        raise ValidationFailure("Please select a future date", field="appointment_date")

    if not data.appointment_time:
        raise ValidationFailure("Please select a time slot", field="appointment_time")
    if data.appointment_time not in TIME_SLOTS:
        raise ValidationFailure("Please select a valid time slot", field="appointment_time")

    if not data.reason or not data.reason.strip():
        raise ValidationFailure("Please provide a reason for visit", field="reason")


async def book_appointment(
    db: AsyncSession, patient_id: int, data: BookingRequest
) -> AppointmentModel:
    validate_booking(data)

    doctor = await get_doctor(db, data.doctor_id)
    if doctor is None:
        raise NotFound("Doctor not found")

    appointment = await create_appointment(
        db,
        patient_id=patient_id,
        doctor_id=doctor.id,
        appointment_date=data.appointment_date,
        appointment_time=data.appointment_time,
        reason=data.reason.strip(),
    )
    logger.info(
        f"Booked appointment {appointment.id} with {doctor.name} on "
        f"{appointment.appointment_date} at {appointment.appointment_time}"
    )
    return appointment
