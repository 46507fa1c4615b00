# healthconnect/schemas/appointment.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BookingRequest(BaseModel):
    """
    Booking form. Every field is optional at the schema level so the booking
    service can report the first missing one with its own message.
    """
    doctor_id: str
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    reason: Optional[str] = Field(None, max_length=1000)


class AppointmentDoctor(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    specialty: str
    clinic_name: str


class AppointmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    patient_id: int
    doctor_id: str
    appointment_date: date
    appointment_time: str
    reason: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    doctor: Optional[AppointmentDoctor] = None
