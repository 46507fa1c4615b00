# healthconnect/schemas/shared.py
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr

class Role(str, Enum):
    doctor = "doctor"
    patient = "patient"
    admin = "admin"

class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    full_name: str
    email: EmailStr
    phone: Optional[str] = None

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    role: Role
    profile: Optional[ProfileOut] = None
    created_at: datetime
