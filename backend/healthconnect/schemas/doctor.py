# healthconnect/schemas/doctor.py
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from healthconnect.config.constants import Region


class DoctorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[int] = None
    name: str
    specialty: str
    experience: int
    region: str
    clinic_name: str
    address: Optional[str] = None
    rating: float
    reviews: int
    consultation_fee: int
    availability: str
    qualifications: Optional[str] = None
    about: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class DoctorQuery(BaseModel):
    """
    Inputs of a directory search. Immutable so a controller can compare the
    previous and next parameter sets.
    """
    model_config = ConfigDict(frozen=True)

    search_text: Optional[str] = None
    region: Optional[str] = None
    # kept as raw text: unknown keys sort by rating instead of failing
    sort: Optional[str] = None


class DoctorSearchState(BaseModel):
    query: DoctorQuery
    loading: bool = False
    error: Optional[str] = None
    doctors: List[DoctorOut] = Field(default_factory=list)


class DoctorRegisterRequest(BaseModel):
    """
    The registration form as submitted. Numeric fields arrive as the text the
    doctor typed; the registration service parses them.
    """
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    specialty: str = Field(..., min_length=1, max_length=100)
    experience: Union[str, int, None] = None
    clinic_name: str = Field(..., min_length=1, max_length=200)
    clinic_address: Optional[str] = Field(None, max_length=255)
    region: Region
    consultation_fee: Union[str, int, None] = None
    qualifications: Optional[str] = Field(None, max_length=255)
    about: Optional[str] = None
    password: str
    confirm_password: str
