# healthconnect/db/models/doctor.py
import uuid

from sqlalchemy import Column, Integer, String, Float, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from healthconnect.db.base import Base


class DoctorModel(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # nullable: seeded directory entries have no account behind them
    user_id = Column(Integer,
                     ForeignKey("users.id", ondelete="SET NULL"),
                     nullable=True,
                     index=True)

    name             = Column(String(120), nullable=False)
    specialty        = Column(String(100), nullable=False, index=True)
    experience       = Column(Integer, nullable=False, default=0)
    region           = Column(String(50), nullable=False, index=True)
    clinic_name      = Column(String(200), nullable=False)
    address          = Column(String(255))
    rating           = Column(Float, nullable=False, default=0.0)
    reviews          = Column(Integer, nullable=False, default=0)
    consultation_fee = Column(Integer, nullable=False, default=0)
    availability     = Column(String(100), nullable=False)
    qualifications   = Column(String(255))
    about            = Column(Text)
    phone            = Column(String(30))
    created_at       = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("UserModel", back_populates="doctor_profiles")
    appointments = relationship("AppointmentModel", back_populates="doctor")
