# healthconnect/db/models/appointment.py
import uuid

from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    String,
    Text,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from healthconnect.db.base import Base


class AppointmentModel(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(String(8), nullable=False)  # e.g. "09:30 AM"
    reason = Column(Text, nullable=True)
    status = Column(String(20), default="pending", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # No unique (doctor, date, time) constraint: double booking is allowed

    patient = relationship("UserModel", back_populates="appointments")
    doctor = relationship("DoctorModel", back_populates="appointments")
