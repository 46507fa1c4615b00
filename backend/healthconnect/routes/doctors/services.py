# healthconnect/routes/doctors/services.py
import logging
import re
from typing import Any, Dict, Optional, Tuple, Union

from sqlalchemy.ext.asyncio import AsyncSession

from healthconnect.config.constants import (
    DEFAULT_AVAILABILITY,
    DEFAULT_RATING,
    DEFAULT_REVIEWS,
    DOCTOR_TITLE,
)
from healthconnect.config.settings import settings
from healthconnect.core.errors import ValidationFailure
from healthconnect.db.crud.auth import create_doctor_account
from healthconnect.db.models import DoctorModel, UserModel
from healthconnect.schemas.doctor import DoctorRegisterRequest

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TITLE = re.compile(r"^dr(\.|\s)", re.IGNORECASE)


def validate_registration(data: DoctorRegisterRequest) -> None:
    """Password checks, in the order the form reports them."""
    if data.password != data.confirm_password:
        raise ValidationFailure("Passwords do not match!", field="confirm_password")
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailure(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters!", field="password"
        )


def parse_leading_int(raw: Union[str, int, None]) -> Optional[int]:
    """
    Integer at the start of the text ("75", "75 USD"), or None.
    "abc", "" and None do not parse.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def consultation_fee_from(raw: Union[str, int, None]) -> int:
    fee = parse_leading_int(raw)
    if fee is None or fee < 0:
        return settings.default_consultation_fee
    return fee


def experience_from(raw: Union[str, int, None]) -> int:
    years = parse_leading_int(raw)
    return years if years is not None and years >= 0 else 0


def with_title(name: str) -> str:
    """'Jane Roe' -> 'Dr. Jane Roe'; names already carrying the title are kept."""
    name = name.strip()
    if _TITLE.match(name):
        return name
    return f"{DOCTOR_TITLE} {name}"


def doctor_fields_from(data: DoctorRegisterRequest) -> Dict[str, Any]:
    return {
        "name": with_title(data.name),
        "specialty": data.specialty,
        "experience": experience_from(data.experience),
        "region": data.region.value,
        "clinic_name": data.clinic_name,
        "address": data.clinic_address,
        "rating": DEFAULT_RATING,
        "reviews": DEFAULT_REVIEWS,
        "consultation_fee": consultation_fee_from(data.consultation_fee),
        "availability": DEFAULT_AVAILABILITY,
        "qualifications": data.qualifications,
        "about": data.about,
        "phone": data.phone,
    }


async def register_doctor(
    db: AsyncSession, data: DoctorRegisterRequest
) -> Tuple[UserModel, DoctorModel]:
    """
    Validate the form locally, then create the doctor account and its
    directory row together.
    """
    validate_registration(data)

    user, doctor = await create_doctor_account(
        db,
        email=data.email,
        password=data.password,
        full_name=data.name,
        phone=data.phone,
        doctor_fields=doctor_fields_from(data),
    )
    logger.info(f"Registered doctor '{doctor.name}' ({doctor.specialty}, {doctor.region})")
    return user, doctor
