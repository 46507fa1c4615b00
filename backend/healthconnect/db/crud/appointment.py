import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from fastapi import HTTPException

from healthconnect.config.constants import AppointmentStatus
from healthconnect.core.errors import StoreUnavailable
from healthconnect.db.models import AppointmentModel, DoctorModel

logger = logging.getLogger(__name__)


async def create_appointment(
    db: AsyncSession,
    patient_id: int,
    doctor_id: str,
    appointment_date: date,
    appointment_time: str,
    reason: Optional[str] = None,
) -> AppointmentModel:
    """
    Insert one appointment with status 'pending'.

    Inputs are expected to be validated already; overlapping bookings for
    the same doctor and slot are accepted.

    Args:
        db (AsyncSession): The database session.
        patient_id (int): Account id of the patient booking.
        doctor_id (str): Directory id of the doctor.
        appointment_date (date): Day of the visit.
        appointment_time (str): One of the fixed time slots.
        reason (Optional[str]): Reason for the visit.

    Returns:
        AppointmentModel: the stored row with its doctor loaded.
    """
    logger.info(
        f"CRUD: Creating appointment for patient_id={patient_id} with doctor_id={doctor_id} "
        f"on {appointment_date} at {appointment_time}"
    )
    new_appointment = AppointmentModel(
        patient_id=patient_id,
        doctor_id=doctor_id,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        reason=reason,
        status=AppointmentStatus.PENDING.value,
    )
    db.add(new_appointment)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"CRUD: Error creating appointment for patient_id={patient_id}, doctor_id={doctor_id}. "
            f"Error: {type(e).__name__} - {e}",
            exc_info=True,
        )
        raise StoreUnavailable(f"Failed to book appointment: {e}") from e

    logger.info(f"CRUD: Created appointment_id={new_appointment.id} with status='{new_appointment.status}'.")
    return await _load_appointment(db, new_appointment.id)


async def _load_appointment(db: AsyncSession, appointment_id: str) -> AppointmentModel:
    result = await db.execute(
        select(AppointmentModel)
        .options(selectinload(AppointmentModel.doctor))
        .where(AppointmentModel.id == appointment_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def get_appointments(
    db: AsyncSession,
    user_id: int,
    role: str,
    skip: int = 0,
    limit: int = 100,
) -> List[AppointmentModel]:
    """
    Appointments visible to the caller: patients see their own bookings,
    doctors see bookings made with any directory row they own, admins see all.
    """
    logger.debug(f"CRUD get_appointments: user_id={user_id}, role='{role}', skip={skip}, limit={limit}")

    query = select(AppointmentModel).options(selectinload(AppointmentModel.doctor))

    if role == "patient":
        query = query.where(AppointmentModel.patient_id == user_id)
    elif role == "doctor":
        owned = select(DoctorModel.id).where(DoctorModel.user_id == user_id)
        query = query.where(AppointmentModel.doctor_id.in_(owned))
    elif role != "admin":
        logger.error(f"Unknown role '{role}' attempting to get appointments.")
        raise HTTPException(status_code=403, detail="Insufficient permissions for an unknown role.")

    query = query.order_by(
        AppointmentModel.appointment_date, AppointmentModel.created_at
    ).offset(skip).limit(limit)

    try:
        result = await db.execute(query)
    except SQLAlchemyError as e:
        logger.error(f"CRUD get_appointments failed: {e}", exc_info=True)
        raise StoreUnavailable(f"Failed to fetch appointments: {e}") from e

    appointments = list(result.scalars().all())
    logger.info(f"CRUD get_appointments: Found {len(appointments)} appointments.")
    return appointments
